import argparse
import logging
import sys
from pathlib import Path

from placeholder_image.api.deps import get_settings
from placeholder_image.app_shell.context import ServiceContext
from placeholder_image.components.intercept import InterceptRequest
from placeholder_image.ports.encoder import EncodingError
from placeholder_image.rules.loader import load_rules
from placeholder_image.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

EXIT_NOT_FOUND = 1
EXIT_NOT_INTERCEPTED = 2
EXIT_FAILURE = 3


def get_rules(rules_path: str | None) -> Rules:
    path = Path(rules_path) if rules_path else get_settings().rules_path
    try:
        return load_rules(path)
    except ValueError as e:
        logger.error(f"Invalid rules file {path}: {e}")
        sys.exit(EXIT_FAILURE)


def handle_render(rules: Rules, args: argparse.Namespace) -> int:
    ctx = ServiceContext.create(rules)
    request = InterceptRequest.from_url(args.url)

    if not ctx.intercept_service.should_handle(request):
        logger.error(f"Host '{request.host}' is not intercepted.")
        return EXIT_NOT_INTERCEPTED

    try:
        response = ctx.intercept_service.handle(request)
    except EncodingError as e:
        logger.error(f"Encoding failed: {e}")
        return EXIT_FAILURE

    if not response.ok:
        print(response.body.decode("utf-8"), file=sys.stderr)
        return EXIT_NOT_FOUND

    Path(args.output).write_bytes(response.body)
    params = ctx.intercept_service.resolve_params(request)
    print(f"Wrote {params.width}x{params.height} {response.content_type} to {args.output}")
    return 0


def handle_check_rules(rules: Rules, args: argparse.Namespace) -> int:
    print(f"Sentinel host: {rules.intercept.sentinel_host}")
    print(f"Image path:    {rules.intercept.image_path}")
    print(f"Font:          {rules.font.path or rules.font.family}")
    print("Rules valid.")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Placeholder Image CLI")
    parser.add_argument("--rules", help="Path to rules.yaml (default: ./rules.yaml)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # render
    render_parser = subparsers.add_parser("render", help="Render a placeholder URL to a file")
    render_parser.add_argument("url", help="e.g. http://placeholder/image.png?width=300")
    render_parser.add_argument("-o", "--output", default="placeholder.png", help="Output file")

    # check-rules
    subparsers.add_parser("check-rules", help="Validate the rules file")

    args = parser.parse_args(argv)
    rules = get_rules(args.rules)
    logging.getLogger().setLevel(rules.logging.level)

    if args.command == "render":
        return handle_render(rules, args)
    elif args.command == "check-rules":
        return handle_check_rules(rules, args)
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
