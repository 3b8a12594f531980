"""
recruit-console command line.

Usage:
    recruit-console login --email admin@example.com
    recruit-console list skills --search React
    recruit-console list jobs --page 2 --filter statusId=<guid>
    recruit-console show qualifications <id>
    recruit-console delete job_types <id>
    recruit-console export applications --filter jobId=<guid>
    recruit-console report monthly_trends --param months=6
    recruit-console logout
"""

import argparse
import getpass
import json
import sys
from typing import Dict, List, Optional

from .api import AuthSession, FileTokenStore, Navigator, RecruitApi, create_api
from .api.errors import ApiError, AuthError
from .api.models import CurrentUser
from .api.resources.reporting import REPORTS
from .api.session import LOGIN_PATH
from .common.config import ClientSettings, validate_config_on_startup
from .common.logger import setup_logging
from .controllers.notifications import FORBIDDEN_MESSAGE, Notifier, ToastKind
from .pages import EXPORT_FILTERS, PAGES, CsvExporter, build_page

DEFAULT_TOKEN_FILE = "~/.recruit-console/token"

# Commands behind the role gate
GATED_COMMANDS = ("delete", "export")


def parse_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Turn ["a=1", "b=2"] into {"a": "1", "b": "2"}."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{pair}'")
        result[key.strip()] = value.strip()
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recruit-console",
        description="Manage recruitment records from the terminal",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Sign in and store the token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    sub.add_parser("logout", help="Forget the stored token")

    list_cmd = sub.add_parser("list", help="List one page of records")
    list_cmd.add_argument("page", choices=sorted(PAGES))
    list_cmd.add_argument("--search", help="Free-text search")
    list_cmd.add_argument("--page-number", "-p", dest="page_number", type=int, default=1)
    list_cmd.add_argument("--filter", action="append", metavar="KEY=VALUE", help="Extra filter (repeatable)")

    show = sub.add_parser("show", help="Show one record")
    show.add_argument("page", choices=sorted(PAGES))
    show.add_argument("id")

    delete = sub.add_parser("delete", help="Delete one record")
    delete.add_argument("page", choices=sorted(PAGES))
    delete.add_argument("id")

    export = sub.add_parser("export", help="Download a CSV export")
    export.add_argument("resource", choices=sorted(EXPORT_FILTERS))
    export.add_argument("--filter", action="append", metavar="KEY=VALUE")

    report = sub.add_parser("report", help="Print a report as JSON")
    report.add_argument("name", choices=sorted(REPORTS))
    report.add_argument("--param", action="append", metavar="KEY=VALUE")

    return parser


def print_table(columns, rows) -> None:
    widths = {
        c: max([len(c)] + [len(row.get(c, "")) for row in rows])
        for c in columns
    }
    widths = {c: min(w, 40) for c, w in widths.items()}
    header = " | ".join(f"{c.upper():<{widths[c]}}" for c in columns)
    print("=" * len(header))
    print(header)
    print("=" * len(header))
    for row in rows:
        print(" | ".join(f"{row.get(c, '')[:widths[c]]:<{widths[c]}}" for c in columns))
    print("=" * len(header))


def print_toasts(notifier: Notifier) -> None:
    for toast in notifier.active():
        marker = "✅" if toast.kind == ToastKind.SUCCESS else "❌"
        print(f"{marker} {toast.message}")
        for field_name, message in toast.field_errors.items():
            print(f"   - {field_name}: {message}")


def cmd_login(args, api: RecruitApi, session: AuthSession, notifier: Notifier) -> int:
    password = args.password or getpass.getpass("Password: ")
    try:
        tokens = api.auth.login(args.email, password)
    except AuthError:
        notifier.error("Invalid email or password")
        return 1
    session.set_token(tokens.access_token)
    user = api.current_user(tokens.access_token)
    role = f" ({user.role})" if user else ""
    print(f"✅ Logged in as {args.email}{role}")
    return 0


def cmd_list(args, api: RecruitApi, notifier: Notifier) -> int:
    page = build_page(args.page, api, notifier=notifier)
    filters = parse_pairs(args.filter)
    if args.search:
        filters["search"] = args.search
    page.list.filters.update(filters)
    page.list.pagination.current_page = max(1, args.page_number)

    page.list.load_lookups()
    if not page.list.load():
        return 1

    pagination = page.list.pagination
    if page.list.is_empty:
        print(page.list.empty_text)
        return 0

    print_table(page.config.columns, page.rows())
    print(
        f"\nShowing {pagination.first_item}-{pagination.last_item} of {pagination.total_count}"
        f" (page {pagination.current_page} of {pagination.total_pages})"
    )
    return 0


def cmd_show(args, api: RecruitApi, notifier: Notifier) -> int:
    page = build_page(args.page, api, notifier=notifier)
    if not page.detail.open_by_id(args.id):
        return 1
    print(json.dumps(page.detail.item, indent=2, default=str))
    return 0


def cmd_delete(args, api: RecruitApi, notifier: Notifier, user: CurrentUser) -> int:
    page = build_page(args.page, api, user=user, notifier=notifier)
    if not page.can_manage:
        notifier.error(FORBIDDEN_MESSAGE)
        return 1
    return 0 if page.delete(args.id) else 1


def cmd_export(args, api: RecruitApi, notifier: Notifier, settings: ClientSettings, user: CurrentUser) -> int:
    filters = parse_pairs(args.filter)
    exporter = CsvExporter(api, download_dir=settings.download_dir, user=user, notifier=notifier)
    if not exporter.can_export:
        notifier.error(FORBIDDEN_MESSAGE)
        return 1
    path = exporter.export(args.resource, **filters)
    if path is None:
        return 1
    print(f"💾 Saved {path}")
    return 0


def cmd_report(args, api: RecruitApi) -> int:
    data = api.reports.fetch(args.name, **parse_pairs(args.param))
    print(json.dumps(data, indent=2, default=str))
    return 0


def resolve_user(api: RecruitApi, session: AuthSession) -> CurrentUser:
    """The signed-in user, or an anonymous one with role "Unknown"."""
    return api.current_user(session.token) or CurrentUser()


def run(args, settings: ClientSettings) -> int:
    session = AuthSession(FileTokenStore(settings.token_file or DEFAULT_TOKEN_FILE))
    navigator = Navigator()
    notifier = Notifier(ttl_seconds=settings.toast_ttl_seconds)
    api = create_api(session, navigator=navigator, settings=settings)

    if args.command == "logout":
        session.clear()
        print("👋 Logged out")
        return 0

    try:
        if args.command in GATED_COMMANDS and not session.is_authenticated:
            navigator.redirect_to_login()
            code = 1
        elif args.command == "login":
            code = cmd_login(args, api, session, notifier)
        elif args.command == "list":
            code = cmd_list(args, api, notifier)
        elif args.command == "show":
            code = cmd_show(args, api, notifier)
        elif args.command == "delete":
            code = cmd_delete(args, api, notifier, resolve_user(api, session))
        elif args.command == "export":
            code = cmd_export(args, api, notifier, settings, resolve_user(api, session))
        else:
            code = cmd_report(args, api)
    except ApiError as e:
        # login and report have no controller to contain the failure
        notifier.error("Request failed", error=e)
        code = 1

    print_toasts(notifier)
    if navigator.location == LOGIN_PATH:
        print("🔒 Session expired or missing. Run: recruit-console login --email <email>")
        return 1
    return code


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = validate_config_on_startup()
        setup_logging(settings.log_level, settings.log_format)
        return run(args, settings)
    except ValueError as e:
        print(f"❌ ERROR: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
