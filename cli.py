import argparse
import json
import logging
import os
import sys
import uuid as _uuid
from pathlib import Path

from config.settings import get_settings
from db import schema
from db.connection import connection_factory, get_connection
from db.repos.friends_repo import FriendsRepo
from pipelines.runner import Pipeline, RunContext
from pipelines.smart_import import process_text
from pipelines.steps import ExtractFriends, NormalizeFriends
from services.batch_persister import BatchPersister
from services.errors import SchemaViolation, SmartImportError
from services.extractor import FriendExtractor
from services.llm_client import LLMClient
from services.reporting import print_extraction, print_summary
from utils.logging_setup import init_logging


logger = logging.getLogger("cli")

SAMPLE_TEXT = (
    "我最近认识了几个新朋友。第一个是张总，女的，看起来30出头，在腾讯做技术总监，手机13800138000，微信是zhangzong2024。"
    "第二个是李工，男，大概28岁，在阿里云做架构师，电话15900159000，微信号lee_arch。"
    "还有一个是陈经理，女，35岁左右，在美团做产品经理，手机号是18800188000，微信chenpm2024。"
)


def _read_input_text(args) -> str:
    if args.sample:
        return SAMPLE_TEXT
    if args.text is not None:
        return args.text
    if args.file == "-":
        return sys.stdin.read()
    return Path(args.file).read_text(encoding="utf-8")


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_import(args):
    try:
        text = _read_input_text(args)
        llm = LLMClient(get_settings())
    except (OSError, RuntimeError) as e:
        logger.error("Import failed: %s", e, extra={"step": "import", "status": "error", "error": type(e).__name__})
        sys.exit(1)
    print("Input text:")
    print(text)
    print()

    extractor = FriendExtractor(llm)
    ctx = RunContext()
    try:
        if args.dry_run:
            ctx.text = text
            ctx = Pipeline([ExtractFriends(extractor), NormalizeFriends()]).run(ctx)
            print_extraction(ctx.friends)
            print_summary(None, dry_run=True)
            return
        conn = get_connection(args.db)
        try:
            schema.bootstrap(conn)
        finally:
            conn.close()
        result = process_text(text, extractor=extractor, persister=BatchPersister(connection_factory(args.db)), ctx=ctx)
    except SchemaViolation as e:
        logger.error("Import failed: %s", e, extra={"step": e.stage.value, "status": "error", "error": type(e).__name__})
        print("Offending payload:")
        print(json.dumps(e.payload, indent=2, ensure_ascii=False, default=str))
        sys.exit(1)
    except SmartImportError as e:
        logger.error("Import failed: %s", e, extra={"step": e.stage.value, "status": "error", "error": type(e).__name__})
        sys.exit(1)

    print_extraction(ctx.friends)
    print_summary(result)
    if args.json:
        print(json.dumps(result.to_dict()))


def cmd_show(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
        repo = FriendsRepo(conn)
        rows = repo.get_by_ids(args.ids) if args.ids else repo.list_recent(limit=args.limit)
    finally:
        conn.close()
    print(json.dumps(rows, indent=2, ensure_ascii=False))


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex
    parser = argparse.ArgumentParser(description="Friend smart-import CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the friends table")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_imp = sub.add_parser("import", help="Extract friends from free text and store them")
    src = p_imp.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", help="Text describing one or more people")
    src.add_argument("--file", help="Read text from a UTF-8 file ('-' for stdin)")
    src.add_argument("--sample", action="store_true", help="Use the built-in three-person sample text")
    p_imp.add_argument("--dry-run", action="store_true", help="Extract and print only; write nothing")
    p_imp.add_argument("--json", action="store_true", help="Also print the result as {count, insertIds} JSON")
    p_imp.set_defaults(func=cmd_import)

    p_show = sub.add_parser("show", help="Print stored friends as JSON")
    p_show.add_argument("--ids", type=int, nargs="+", help="Row ids to show")
    p_show.add_argument("--limit", type=int, default=10, help="Most recent rows to show when --ids is not given")
    p_show.set_defaults(func=cmd_show)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
