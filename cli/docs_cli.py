"""Command-line interface for checking and browsing a documentation content tree."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from docregistry.exceptions import NotFoundError, ValidationError
from docregistry.filesystem.content_manager import ContentManager
from docregistry.filesystem.toml_manager import (
    SITE_CONFIG_FILE,
    NamespaceDef,
    SiteConfig,
    write_site_config,
)
from docregistry.services.path_service import normalize_namespace
from docregistry.services.registry import DocumentRegistry

logger = logging.getLogger(__name__)


def _build(content_manager: ContentManager, strict: bool) -> DocumentRegistry | None:
    """Build the registry, printing validation problems instead of raising."""
    try:
        return content_manager.build_registry(strict=strict)
    except ValidationError as exc:
        print(f"Content failed validation ({len(exc.problems)} problem(s)):")
        for problem in exc.problems:
            print(f"  - {problem}")
        return None


def cmd_check(content_manager: ContentManager, strict: bool, check_links: bool) -> int:
    registry = _build(content_manager, strict)
    if registry is None:
        return 1

    failures = 0
    for namespace in registry.namespaces():
        try:
            registry.navigation_tree(namespace)
        except ValidationError as exc:
            failures += len(exc.problems)
            for problem in exc.problems:
                print(f"  - {problem}")

    if check_links:
        broken = sorted(registry.validate_links())
        for link in broken:
            print(f"  - broken link in {link.page}: {link.reference}")
        failures += len(broken)

    if failures:
        print(f"{failures} problem(s) found in {len(registry)} pages")
        return 1
    print(f"OK: {len(registry)} pages, {len(registry.aliases)} aliases")
    return 0


def cmd_nav(content_manager: ContentManager, strict: bool, namespace: str) -> int:
    registry = _build(content_manager, strict)
    if registry is None:
        return 1
    try:
        tree = registry.navigation_tree(namespace)
        for depth, node in tree.walk():
            weight = "" if node.weight is None else f" [{node.weight}]"
            print(f"{'  ' * depth}{node.name}{weight}  {node.path}")
    except ValidationError as exc:
        print(f"Error: {exc}")
        return 1
    return 0


def cmd_resolve(content_manager: ContentManager, strict: bool, path: str) -> int:
    registry = _build(content_manager, strict)
    if registry is None:
        return 1
    try:
        page = registry.resolve(path)
    except NotFoundError as exc:
        print(f"Error: {exc}")
        return 1
    print(f"{page.path}\t{page.title}")
    return 0


def cmd_tags(
    content_manager: ContentManager, strict: bool, namespace: str, tag: str | None
) -> int:
    registry = _build(content_manager, strict)
    if registry is None:
        return 1
    if tag is None:
        for name, count in registry.tags(namespace).items():
            print(f"{name}\t{count}")
        return 0
    for page in registry.find_by_tag(namespace, tag):
        print(f"{page.path}\t{page.title}")
    return 0


def cmd_init(content_dir: Path, namespace: str) -> int:
    namespace = normalize_namespace(namespace)
    config_path = content_dir / SITE_CONFIG_FILE
    if config_path.exists():
        print(f"Error: {config_path} already exists")
        return 1
    content_dir.mkdir(parents=True, exist_ok=True)
    config = SiteConfig(
        default_namespace=namespace,
        namespaces=[NamespaceDef(id=namespace, title=namespace.replace("_", "."))],
    )
    write_site_config(content_dir, config)
    print(f"Initialized site config in {config_path}")
    return 0


def cmd_serve(
    content_dir: Path, namespace: str, strict: bool, host: str, port: int, verbose: bool
) -> int:
    import uvicorn

    from docregistry.config import Settings
    from docregistry.main import create_app

    settings = Settings(
        content_dir=content_dir,
        default_namespace=namespace,
        strict=strict,
        host=host,
        port=port,
        debug=verbose,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
    return 0


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="docregistry",
        description="Validate and browse a documentation content tree",
    )
    parser.add_argument("--dir", "-d", default=".", help="Content directory (default: current)")
    parser.add_argument(
        "--namespace",
        "-n",
        default="v2_0",
        help="Default namespace for unscoped tags (default: v2_0)",
    )
    parser.add_argument(
        "--no-strict",
        action="store_true",
        help="Tolerate unresolved menu parents and unparseable files",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate structure and cross-references")
    check.add_argument("--no-links", action="store_true", help="Skip the broken-link check")

    nav = subparsers.add_parser("nav", help="Print the navigation tree of a namespace")
    nav.add_argument("menu_namespace", metavar="NAMESPACE")

    resolve = subparsers.add_parser("resolve", help="Resolve a path or alias")
    resolve.add_argument("path")

    tags = subparsers.add_parser("tags", help="List tags, or pages carrying a tag")
    tags.add_argument("menu_namespace", metavar="NAMESPACE")
    tags.add_argument("tag", nargs="?")

    subparsers.add_parser("init", help="Write a default docs.toml")

    serve = subparsers.add_parser("serve", help="Serve the registry over HTTP")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    content_dir = Path(args.dir).resolve()
    strict = not args.no_strict

    if args.command == "init":
        return cmd_init(content_dir, args.namespace)
    if args.command == "serve":
        return cmd_serve(content_dir, args.namespace, strict, args.host, args.port, args.verbose)

    content_manager = ContentManager(content_dir=content_dir, default_namespace=args.namespace)
    try:
        if args.command == "check":
            return cmd_check(content_manager, strict, check_links=not args.no_links)
        if args.command == "nav":
            return cmd_nav(content_manager, strict, args.menu_namespace)
        if args.command == "resolve":
            return cmd_resolve(content_manager, strict, args.path)
        if args.command == "tags":
            return cmd_tags(content_manager, strict, args.menu_namespace, args.tag)
    except ValueError as exc:
        logger.debug("Configuration error", exc_info=True)
        print(f"Error: {exc}")
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
