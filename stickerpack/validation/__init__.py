from .limits import ValidationLimits
from .validator import PackValidator, validate_pack
