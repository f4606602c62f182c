from .friend_record import FriendRecord
from .friend_batch import FriendBatch
from .persisted_batch_result import PersistedBatchResult

__all__ = [
    "FriendRecord",
    "FriendBatch",
    "PersistedBatchResult",
]
