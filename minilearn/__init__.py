from . import dual, operators, para, vector_ops  # noqa: F401
from .autodiff import central_difference, derivative, derivative_check, jacobian  # noqa: F401
from .dual import Dual, konst  # noqa: F401
from .errors import (  # noqa: F401
    DimensionMismatchError,
    DomainError,
    MinilearnError,
    UnsupportedOperationError,
)
from .functor import (  # noqa: F401
    ErrorFunction,
    param_to_learn,
    param_to_learn_dual,
    quadratic_error,
    total_error,
)
from .learner import (  # noqa: F401
    Learner,
    braid,
    comult,
    compose,
    identity,
    mult,
    product,
)
