"""ifexpr CLI — ifexpr check, ifexpr build, ifexpr run."""
import logging
import sys
import os

from ifexpr.config import get_config
from ifexpr.errors import IfExprError
from ifexpr.transformer import Transformer


def _output_path(filepath: str, suffix: str) -> str:
    stem, _ = os.path.splitext(filepath)
    return stem + suffix


def main():
    if len(sys.argv) < 2:
        print("Usage: ifexpr <command> [file.py]", file=sys.stderr)
        print("Commands: run, build, check", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command in ("run", "build", "check"):
        if len(sys.argv) < 3:
            print(f"Usage: ifexpr {command} <file.py>", file=sys.stderr)
            sys.exit(1)
        filepath = sys.argv[2]
        if not os.path.exists(filepath):
            print(f"Error: file not found: {filepath}", file=sys.stderr)
            sys.exit(1)
        with open(filepath) as f:
            source = f.read()

        config = get_config()
        logging.basicConfig(level=config["logging"]["level"], format="%(name)s: %(message)s")

        try:
            python_code = Transformer(source, filepath).transform()
        except IfExprError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if command == "check":
            print(f"OK: {filepath}")
            sys.exit(0)

        if command == "build":
            out_path = _output_path(filepath, config["build"]["output_suffix"])
            with open(out_path, "w") as out:
                out.write(python_code)
            print(f"Built: {out_path}")
            sys.exit(0)

        if command == "run":
            exec(compile(python_code, filepath, "exec"), {"__name__": "__main__"})
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
