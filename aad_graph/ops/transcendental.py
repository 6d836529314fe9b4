# aad_graph/ops/transcendental.py
import numpy as np


def exp_value(a):
    return np.exp(a)

def exp_deriv(a, g):
    return g * np.exp(a)

def ln_value(a):
    return np.log(a)

def ln_deriv(a, g):
    return g / a


# ---------------- trigonometric ---------------- #
def sin_value(a):
    return np.sin(a)

def sin_deriv(a, g):
    return g * np.cos(a)

def cos_value(a):
    return np.cos(a)

def cos_deriv(a, g):
    return g * -np.sin(a)

def tan_value(a):
    return np.tan(a)

def tan_deriv(a, g):
    # d tan(a) = 1 / cos^2(a)
    c = np.cos(a)
    return g / (c * c)


# ---------------- hyperbolic ---------------- #
def sinh_value(a):
    return np.sinh(a)

def sinh_deriv(a, g):
    return g * np.cosh(a)

def cosh_value(a):
    return np.cosh(a)

def cosh_deriv(a, g):
    return g * np.sinh(a)

def tanh_value(a):
    return np.tanh(a)

def tanh_deriv(a, g):
    # d tanh(a) = 1 / cosh^2(a)
    c = np.cosh(a)
    return g / (c * c)
