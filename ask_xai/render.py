import shlex
import shutil
import subprocess
import sys

from ask_xai.config import warn


def render_output(text: str, use_renderer: bool = False, renderer: str = "glow -", out=None):
    """
    Print ``text``, or pipe it through the markdown renderer when asked.

    If the renderer is missing, cannot start, or exits non-zero, the plain
    text is printed instead so the reply is never lost.
    """
    out = out or sys.stdout
    if not use_renderer:
        print(text, file=out)
        return

    command = shlex.split(renderer)
    if not command or shutil.which(command[0]) is None:
        warn(f"Renderer {renderer!r} not found, printing plain text.")
        print(text, file=out)
        return

    out.flush()
    try:
        result = subprocess.run(command, input=text, text=True, check=False)
    except OSError as e:
        warn(f"Renderer {renderer!r} could not be started ({e}), printing plain text.")
        print(text, file=out)
        return

    if result.returncode != 0:
        warn(f"Renderer {renderer!r} exited with status {result.returncode}, printing plain text.")
        print(text, file=out)
