"""
CSP Builder CLI
"""
import argparse
import json
import sys
from pathlib import Path

from csp_builder.core.catalog import CatalogError, get_catalog
from csp_builder.core.explain import explanation_entries
from csp_builder.core.parser import describe_parsed, parse_policy
from csp_builder.core.policy import create_policy
from csp_builder.core.serializer import serialize
from csp_builder.logging_config import setup_cli_logging


def build_parser():
    """Argument parser for all subcommands"""
    parser = argparse.ArgumentParser(
        prog="csp_builder",
        description="CSP Builder - assemble, parse and explain Content-Security-Policy headers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List supported directives
  python -m csp_builder directives

  # Show one directive with its suggested values
  python -m csp_builder directives --name script-src

  # Parse an existing header
  python -m csp_builder parse "default-src 'self'; img-src https: data:"

  # Explain what a header allows
  python -m csp_builder explain "default-src 'self'; object-src 'none'"

  # Build a header from scratch, or edit an existing one
  python -m csp_builder build --add default-src "'self'" --add img-src https: --enable upgrade-insecure-requests
  python -m csp_builder build --from "default-src 'self'" --remove default-src "'self'" --add default-src "'none'"

  # Run the HTTP API
  python -m csp_builder serve --port 8080
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug output to stderr')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Directives command
    directives_parser = subparsers.add_parser('directives', help='List supported directives')
    directives_parser.add_argument('--name', help='Show a single directive')
    directives_parser.add_argument('--format', choices=['text', 'json'], default='text',
                                   help='Output format')

    # Parse command
    parse_parser = subparsers.add_parser('parse', help='Parse a CSP header value')
    parse_parser.add_argument('header', help='Header value to parse')
    parse_parser.add_argument('--format', choices=['text', 'json'], default='text',
                              help='Output format')

    # Explain command
    explain_parser = subparsers.add_parser('explain', help='Explain what a CSP header allows')
    explain_parser.add_argument('header', help='Header value to explain')

    # Build command
    build_parser_ = subparsers.add_parser('build', help='Build or edit a CSP header')
    build_parser_.add_argument('--from', dest='base', default='',
                               help='Existing header to start from')
    build_parser_.add_argument('--add', nargs=2, action='append', default=[],
                               metavar=('DIRECTIVE', 'VALUE'), help='Add a value to a directive')
    build_parser_.add_argument('--remove', nargs=2, action='append', default=[],
                               metavar=('DIRECTIVE', 'VALUE'), help='Remove a value from a directive')
    build_parser_.add_argument('--enable', action='append', default=[], metavar='DIRECTIVE',
                               help='Enable a boolean directive')
    build_parser_.add_argument('--disable', action='append', default=[], metavar='DIRECTIVE',
                               help='Disable a boolean directive')
    build_parser_.add_argument('--format', choices=['text', 'json'], default='text',
                               help='Output format')
    build_parser_.add_argument('--output', help='Write the header value to this file')

    # Serve command
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', help='Bind address (default from settings)')
    serve_parser.add_argument('--port', type=int, help='Listen port (default from settings)')

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_cli_logging(verbose=args.verbose)

    # Execute command
    try:
        if args.command == 'directives':
            return cmd_directives(args)
        elif args.command == 'parse':
            return cmd_parse(args)
        elif args.command == 'explain':
            return cmd_explain(args)
        elif args.command == 'build':
            return cmd_build(args)
        elif args.command == 'serve':
            return cmd_serve(args)
    except (CatalogError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def cmd_directives(args):
    """Execute directives command"""
    catalog = get_catalog()
    if args.name:
        spec = catalog.get(args.name)
        if spec is None:
            print(f"Error: unknown directive '{args.name}'", file=sys.stderr)
            return 1
        specs = [spec]
    else:
        specs = list(catalog)

    if args.format == 'json':
        print(json.dumps([spec.model_dump(mode='json') for spec in specs], indent=2, ensure_ascii=False))
        return 0

    for spec in specs:
        inherits = " (falls back to default-src)" if spec.inherits else ""
        print(f"{spec.icon} {spec.name} [{spec.kind.value}]{inherits}")
        if args.name:
            print(f"   {spec.description}")
            print(f"   Label: {spec.display_label} (link text: {spec.link_text or spec.name})")
            for suggestion in spec.suggestions:
                print(f"   {suggestion.value:<18} {suggestion.description}")
            for template in spec.prefix_templates:
                print(f"   {template.prefix:<18} {template.description}")
    return 0


def cmd_parse(args):
    """Execute parse command"""
    parsed = parse_policy(args.header)
    catalog = get_catalog()

    if args.format == 'json':
        print(json.dumps([p.model_dump() for p in parsed], indent=2))
    else:
        for line, item in zip(describe_parsed(parsed), parsed):
            marker = "" if item.name in catalog else "  (unsupported, ignored on load)"
            print(f"{line}{marker}")

    if not parsed:
        print("No directives found", file=sys.stderr)
        return 1
    return 0


def cmd_explain(args):
    """Execute explain command"""
    policy = create_policy()
    policy.load_header(args.header)
    for entry in explanation_entries(policy):
        print(f"{entry.icon} {entry.text}")
    return 0


def cmd_build(args):
    """Execute build command"""
    policy = create_policy()
    unknown = []
    if args.base:
        unknown.extend(policy.load_header(args.base).unknown)

    statuses = []
    for name, value in args.add:
        statuses.append((name, policy.add_value(name, value)))
    for name, value in args.remove:
        statuses.append((name, policy.remove_value(name, value)))
    for name in args.enable:
        statuses.append((name, policy.set_enabled(name, True)))
    for name in args.disable:
        statuses.append((name, policy.set_enabled(name, False)))
    for name, status in statuses:
        if status is None and name not in unknown:
            unknown.append(name)

    header = serialize(policy)
    entries = explanation_entries(policy)

    if args.output:
        output_path = Path(args.output)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(header + "\n")

    if args.format == 'json':
        report = {
            'header': header,
            'directives': policy.to_dict(),
            'explanation': [entry.text for entry in entries],
            'unknown': unknown,
        }
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        print(header)
        if entries:
            print()
            for entry in entries:
                print(f"{entry.icon} {entry.text}")
        for name in unknown:
            print(f"Warning: unknown directive '{name}' ignored", file=sys.stderr)

    return 0


def cmd_serve(args):
    """Execute serve command"""
    import uvicorn

    from csp_builder.config.loader import get_settings

    settings = get_settings()
    uvicorn.run(
        "csp_builder.main:app",
        host=args.host or settings.listen_host,
        port=args.port or settings.listen_port,
        log_config=None,
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
