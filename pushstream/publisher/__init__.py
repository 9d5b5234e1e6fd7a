from .protocol import Publisher, Subscriber, Subscription
from .sequence import SequencePublisher
from .subject import PassthroughSubject

__all__ = (
    # Protocols
    "Publisher",
    "Subscriber",
    "Subscription",
    # Sources
    "PassthroughSubject",
    "SequencePublisher",
)
