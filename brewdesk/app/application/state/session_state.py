import threading
from dataclasses import dataclass, field


@dataclass
class SessionState:
    mutation_in_flight: set[str] = field(default_factory=set)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
