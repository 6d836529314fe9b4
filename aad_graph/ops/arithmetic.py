# aad_graph/ops/arithmetic.py
#
# Value rules and local derivative rules (vector-Jacobian products) of the
# algebraic operators. Each `*_deriv` receives the operand value(s) and the
# gradient flowing in from the consumer, and returns the gradient attributable
# to each operand.
import numpy as np

from ..core.tensor import as_scalar, sum_all


# ---------------- unary ---------------- #
def neg_value(a):
    return -a

def neg_deriv(a, g):
    return -g

def square_value(a):
    # conj(a)*a keeps complex input on the real axis (|a|^2)
    return np.conj(a) * a

def square_deriv(a, g):
    return g * (2.0 * np.conj(a))


# ---------------- binary ---------------- #
def add_value(l, r):
    return l + r

def add_deriv(l, r, g):
    return g, g

def mul_value(l, r):
    return l * r

def mul_deriv(l, r, g):
    return r * g, l * g

def div_value(l, r):
    return l / r

def div_deriv(l, r, g):
    """
    y = l / r
      ∂y/∂l =  1/r
      ∂y/∂r = -l/r^2
    """
    return g / r, -l * g / (r * r)

def dot_value(l, r):
    return sum_all(l * r)

def dot_deriv(l, r, g):
    """
    y = Σ l_i r_i is rank-0, so the incoming gradient must be rank-0 too;
    anything else raises TensorRankMismatch.
    """
    d = as_scalar(g)
    return r * d, l * d
