from __future__ import annotations

import json
import os
from typing import Optional, Sequence

from config.settings import get_settings
from models.friend_record import FriendRecord
from models.persisted_batch_result import PersistedBatchResult
from utils.llm_logger import usage_for_run


def print_extraction(records: Sequence[FriendRecord]) -> None:
    """Print the extracted records as a JSON array."""
    print(f"Extracted {len(records)} friend records:")
    print(json.dumps([r.model_dump(mode="json") for r in records], indent=2, ensure_ascii=False))


def print_summary(result: Optional[PersistedBatchResult], dry_run: bool = False) -> None:
    """Print summary of the import run."""
    print("\n" + "=" * 60)
    print("FRIEND SMART IMPORT - SUMMARY")
    print("=" * 60)
    if dry_run:
        print("Dry run: nothing written")
    elif result is None or result.count == 0:
        print("No friends stored")
    else:
        print(f"Stored: {result.count}")
        print(f"Insert ID range: {result.insert_ids[0]} - {result.insert_ids[-1]}")
        print(f"Insert IDs: {result.insert_ids}")
    # LLM usage for the current RUN_ID, only when tracing is on
    settings = get_settings()
    run_id = os.getenv("RUN_ID")
    if run_id and settings.llm_trace:
        usage = usage_for_run(run_id)
        if usage:
            print("LLM Usage:")
            for provider, stats in usage.items():
                print(f"  {provider}: calls={stats.get('calls', 0)}, tokens={stats.get('tokens', 0)}")
    print("=" * 60)
