"""Main entry point for the Barq Preview CLI."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from barq_cli import __version__
from engine.preview import DEVICE_SIZES, VirtualFile, build_preview_html, infer_language, render_frame

logger = logging.getLogger("barq_cli")

# Directories never read as project files
SKIP_DIRS: set[str] = {"node_modules", "dist", "build", "__pycache__"}


def print_help():
    """Print help message."""
    print(f"""
Barq Preview CLI v{__version__}

Usage:
  barq-preview build DIR [options]

Commands:
  build DIR         Build the preview document for the files under DIR

Options:
  -o, --output FILE Write the document to FILE instead of stdout
  --device NAME     Wrap the document in a device frame ({", ".join(sorted(DEVICE_SIZES))})
  --verbose         Log dropped expressions and assembly details
  -h, --help        Show this help
  -v, --version     Show version

Examples:
  barq-preview build ./site                       # Print the preview document
  barq-preview build ./site -o preview.html       # Save it
  barq-preview build ./site --device mobile       # Mobile frame page
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        command: str | None (build, None)
        directory: str | None
        output: str | None
        device: str | None
        verbose: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "command": None,
        "directory": None,
        "output": None,
        "device": None,
        "verbose": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "build" and result["command"] is None:
            result["command"] = "build"
        elif arg in ("--output", "-o"):
            if i + 1 < len(args):
                result["output"] = args[i + 1]
                i += 1
            else:
                print("Error: --output requires a file path")
                sys.exit(1)
        elif arg == "--device":
            if i + 1 < len(args) and args[i + 1] in DEVICE_SIZES:
                result["device"] = args[i + 1]
                i += 1
            else:
                print(f"Error: --device requires one of: {', '.join(sorted(DEVICE_SIZES))}")
                sys.exit(1)
        elif arg == "--verbose":
            result["verbose"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}")
            print("Run 'barq-preview --help' for usage.")
            sys.exit(1)
        elif result["command"] == "build" and result["directory"] is None:
            result["directory"] = arg
        else:
            print(f"Unknown command: {arg}")
            print("Run 'barq-preview --help' for usage.")
            sys.exit(1)

        i += 1

    return result


def read_files(directory: Path) -> list[VirtualFile]:
    """Read every file under `directory` as a virtual file, sorted by relative path."""
    files = []
    for path in sorted(p for p in directory.rglob("*") if p.is_file()):
        rel = path.relative_to(directory)
        if any(part in SKIP_DIRS or part.startswith(".") for part in rel.parts):
            continue
        name = rel.as_posix()
        files.append(
            VirtualFile(
                name=name,
                content=path.read_text(encoding="utf-8", errors="replace"),
                language=infer_language(name),
            )
        )
    return files


def build(directory: str, output: str | None = None, device: str | None = None) -> bool:
    """Build the preview for `directory`. Returns True on success."""
    root = Path(directory)
    if not root.is_dir():
        print(f"Error: {directory} is not a directory")
        return False

    files = read_files(root)
    logger.info("Read %d files from %s", len(files), root)

    html = build_preview_html(files)
    if html is None:
        print(f"Error: no component files (.tsx, .jsx, .html) found in {directory}")
        return False

    if device is not None:
        html = render_frame(html, device)

    if output:
        Path(output).write_text(html, encoding="utf-8")
        print(f"Preview written to {output}")
    else:
        sys.stdout.write(html + "\n")
    return True


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    # Handle help and version first
    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"barq-preview {__version__}")
        return

    logging.basicConfig(
        level=logging.DEBUG if args["verbose"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args["command"] != "build" or args["directory"] is None:
        print_help()
        sys.exit(1)

    success = build(args["directory"], output=args["output"], device=args["device"])
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
