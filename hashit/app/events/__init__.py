from .models import HashEvent, HashEventType
from .emitter import HashEventEmitter, NullEventEmitter, safe_emit
from .memory_emitter import MemoryEventEmitter

__all__ = [
    "HashEvent",
    "HashEventType",
    "HashEventEmitter",
    "NullEventEmitter",
    "MemoryEventEmitter",
    "safe_emit",
]
