"""Engine subpackage - core delivery fee logic and resolution."""
from .pricing_engine import DeliveryPricingEngine
from .models import DeliveryOrder, FeeResult, TraceStep
from .errors import DeliveryPricingError, MissingOrderError, OutOfRangeError, InvalidStateError

__all__ = [
    'DeliveryPricingEngine', 'DeliveryOrder', 'FeeResult', 'TraceStep',
    'DeliveryPricingError', 'MissingOrderError', 'OutOfRangeError', 'InvalidStateError',
]
