# Namespace for pipeline steps
from .extract_friends import ExtractFriends  # noqa: F401
from .normalize_friends import NormalizeFriends  # noqa: F401
from .persist_friends import PersistFriends  # noqa: F401
