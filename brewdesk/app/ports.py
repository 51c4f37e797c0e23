from typing import Callable

# navigate(path)
Navigator = Callable[[str], None]
# notify(kind, message) with kind in {"success", "error", "info"}
Notifier = Callable[[str, str], None]


def notify_quietly(kind: str, message: str) -> None:
    return None
