from .callback import Sink, attach
from .recorder import Recorder, record

__all__ = ("Recorder", "Sink", "attach", "record")
