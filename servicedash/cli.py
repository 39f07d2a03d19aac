"""Command line access to the service directory and link rewriting."""
import argparse
import sys
from pathlib import Path

from servicedash.config import DEFAULT_DIRECTORY
from servicedash.page import sync_page


def cmd_url(args) -> int:
    url = DEFAULT_DIRECTORY.with_host(args.host).get_service_url(args.service)
    if not url:
        return 1
    print(url)
    return 0


def cmd_list(args) -> int:
    directory = DEFAULT_DIRECTORY.with_host(args.host)
    for name, url in directory.urls().items():
        print(f"  {name:16} → {url}")
    return 0


def cmd_rewrite(args) -> int:
    source_path = Path(args.file)
    try:
        source = source_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Cannot read {source_path}: {e}", file=sys.stderr)
        return 2

    page, report = sync_page(source, DEFAULT_DIRECTORY.with_host(args.host))

    if args.in_place:
        source_path.write_text(page, encoding="utf-8")
    elif args.output:
        Path(args.output).write_text(page, encoding="utf-8")
    else:
        sys.stdout.write(page)

    print(f"✅ Rewrote {report.rewritten} links for {report.host}", file=sys.stderr)
    return 0


def cmd_serve(args) -> int:
    import uvicorn
    from services.dashboard import config

    uvicorn.run("services.dashboard.service:app", host=args.bind, port=args.port or config.PORT)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servicedash",
        description="Resolve service URLs and rewrite dashboard links",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  servicedash url redis --host 10.0.0.5      # http://10.0.0.5:9085
  servicedash list                           # every service on localhost
  servicedash rewrite index.html --in-place  # point links at localhost
  servicedash serve --port 8080              # run the dashboard service
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    url = sub.add_parser("url", help="Print the URL of one service")
    url.add_argument("service", help="Service name (case-insensitive)")
    url.add_argument("--host", default=None, help="Host to build the URL with (default: localhost)")
    url.set_defaults(func=cmd_url)

    lst = sub.add_parser("list", help="Print every service with its URL")
    lst.add_argument("--host", default=None, help="Host to build URLs with (default: localhost)")
    lst.set_defaults(func=cmd_list)

    rewrite = sub.add_parser("rewrite", help="Rewrite the service links of an HTML file")
    rewrite.add_argument("file", help="HTML file to read")
    rewrite.add_argument("--host", default=None, help="Host to point links at (default: localhost)")
    target = rewrite.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", help="Write the result here instead of stdout")
    target.add_argument("--in-place", action="store_true", help="Overwrite the input file")
    rewrite.set_defaults(func=cmd_rewrite)

    serve = sub.add_parser("serve", help="Run the dashboard service")
    serve.add_argument("--bind", default="0.0.0.0", help="Interface to listen on")
    serve.add_argument("--port", type=int, default=None, help="Port (default: PORT from the environment)")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
