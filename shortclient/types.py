from typing import Any, TypeAlias
from collections.abc import Awaitable, Callable

from shortclient.models import Notification


# Type aliases for injected capabilities
Clock: TypeAlias = Callable[[], int]  # Milliseconds since the Unix epoch
Notifier: TypeAlias = Callable[[Notification], Any]
Sleep: TypeAlias = Callable[[float], Awaitable[Any]]
Render: TypeAlias = Callable[[], Any]
Clipboard: TypeAlias = Callable[[str], Any]

# Type aliases for Python dictionaries
RecordPayload: TypeAlias = dict[str, Any]
YamlConfig: TypeAlias = dict[str, Any]
