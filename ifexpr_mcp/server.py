"""ifexpr MCP Server — exposes the If-chain expander via MCP protocol."""

import sys
import io

from mcp.server.fastmcp import FastMCP

from ifexpr.transformer import Transformer
from ifexpr.errors import IfExprError

mcp = FastMCP("ifexpr")


def _read(filepath: str) -> tuple[str | None, str | None]:
    """Return ``(source, None)`` or ``(None, error_message)``."""
    try:
        with open(filepath) as f:
            return f.read(), None
    except FileNotFoundError:
        return None, f"Error: file not found: {filepath}"
    except OSError as e:
        return None, f"Error reading file: {e}"


@mcp.tool()
def ifexpr_check(filepath: str) -> str:
    """Check that every If-chain in a Python file is well formed.

    Args:
        filepath: Path to the .py file to check
    """
    return check_file(filepath)


def check_file(filepath: str) -> str:
    """Core logic for checking a file — testable without MCP."""
    source, error = _read(filepath)
    if error:
        return error
    try:
        Transformer(source, filepath).transform()
        return f"OK: {filepath}"
    except IfExprError as e:
        return f"Error: {e}"


@mcp.tool()
def ifexpr_build(filepath: str) -> str:
    """Expand the If-chains of a Python file. Returns the expanded source.

    Args:
        filepath: Path to the .py file to expand
    """
    return build_file(filepath)


def build_file(filepath: str) -> str:
    """Core logic for expanding a file — testable without MCP."""
    source, error = _read(filepath)
    if error:
        return error
    try:
        return Transformer(source, filepath).transform()
    except IfExprError as e:
        return f"Error: {e}"


@mcp.tool()
def ifexpr_run(filepath: str) -> str:
    """Expand a Python file's If-chains and execute it, returning the output.

    Args:
        filepath: Path to the .py file to run
    """
    return run_file(filepath)


def run_file(filepath: str) -> str:
    """Core logic for running a file — testable without MCP."""
    source, error = _read(filepath)
    if error:
        return error
    try:
        python_code = Transformer(source, filepath).transform()
    except IfExprError as e:
        return f"Error: {e}"

    # Capture stdout during execution
    old_stdout = sys.stdout
    old_stderr = sys.stderr
    captured_out = io.StringIO()
    captured_err = io.StringIO()
    try:
        sys.stdout = captured_out
        sys.stderr = captured_err
        exec(compile(python_code, filepath, "exec"), {"__name__": "__main__"})
    except Exception as e:
        return f"{captured_out.getvalue()}Error during execution: {type(e).__name__}: {e}"
    finally:
        sys.stdout = old_stdout
        sys.stderr = old_stderr

    output = captured_out.getvalue()
    err_output = captured_err.getvalue()
    if err_output:
        output += f"\n[stderr]: {err_output}"
    return output if output else "(program produced no output)"


IFEXPR_GUIDE = """\
# Writing If-chains

An If-chain is a conditional written as an expression. Import the macro,
write the chain, and run the file through ifexpr (ifexpr_build / ifexpr_run).

```
from ifexpr.macro import If

size = If(n > 10).then("big").else_("small").end()
```

## Continuations
- `.then(expr)` / `.else_(expr)`: value of the branch (exactly one argument)
- `.then_do(a, b, ...)` / `.else_do(...)`: evaluated for side effects only;
  the branch keeps the value of the previous `.then` / `.else_` (or None)
- `.else_if(cond)`: starts a nested chain in the else branch
- `.end()` / `.end_()`: closes the chain; required

Several `.then(...)` calls run in order and the branch takes the last value.
A branch that never produced a value evaluates to None.

## Expansion
```
If(c).then(a).else_(b).end()                  ->  a if c else b
If(c).then(a).end()                           ->  a if c else None
If(c).then(a).then(b).end()                   ->  (a, b)[-1] if c else None
If(c).then(a).else_if(d).then(b).end()        ->  a if c else b if d else None
```

Only the selected branch is evaluated at runtime.
"""


@mcp.prompt()
def ifexpr_guide() -> str:
    """Guide to writing If-chains. Use this when writing files that import ifexpr.macro."""
    return IFEXPR_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
