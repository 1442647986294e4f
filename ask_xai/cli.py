#!/usr/bin/env python3
import argparse
import sys

from ask_xai.client import XaiClient
from ask_xai.config import Diagnostics, load_settings
from ask_xai.errors import AskError, EmptyPromptError, InvalidArgumentError
from ask_xai.prompt import assemble_prompt, join_prompt, read_attachment, read_piped_input, read_prompt_file
from ask_xai.render import render_output
from ask_xai.request import InvocationParameters, build_chat_request, replace_surrogates


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but bad usage raises instead of exiting with status 2."""

    def error(self, message):
        raise InvalidArgumentError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="ask-xai-grok",
        description="Send a prompt (and optionally a file) to xAI Grok and print the reply.",
        epilog="The prompt may also be piped on stdin. Requires XAI_API_KEY.",
    )
    parser.add_argument("words", nargs="*", help="Prompt text")
    parser.add_argument("-p", dest="prompt_file", metavar="PATH", help="Read the prompt from a file")
    parser.add_argument("-m", dest="model", metavar="MODEL", help="Model to use")
    parser.add_argument("-f", dest="attach", metavar="PATH", help="Attach a file's contents to the prompt")
    parser.add_argument("-e", dest="effort", metavar="EFFORT", help="Reasoning effort (e.g. low, high)")
    parser.add_argument("-g", dest="glow", action="store_true", help="Render the reply through glow")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Print diagnostics to stderr")
    parser.add_argument("-i", dest="list_models", action="store_true", help="List available models and exit")
    return parser


def invocation_parameters(args, settings) -> InvocationParameters:
    """Turn parsed arguments into InvocationParameters, reading the -p file if given."""
    file_prompt = read_prompt_file(args.prompt_file) if args.prompt_file else None
    return InvocationParameters(
        model=args.model or settings.default_model,
        use_renderer=args.glow,
        attached_file_path=args.attach,
        reasoning_effort=args.effort,
        verbose=args.verbose,
        prompt=join_prompt(file_prompt, args.words),
    )


def run(argv=None, stdin=None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    if args.list_models:
        XaiClient(load_settings(strict=False), Diagnostics(args.verbose)).list_models()
        return 0

    settings = load_settings()
    params = invocation_parameters(args, settings)
    diagnostics = Diagnostics(params.verbose)
    client = XaiClient(settings, diagnostics)

    prompt = assemble_prompt(params.prompt, read_piped_input(stdin))
    params = params.model_copy(update={"prompt": replace_surrogates(prompt)})
    if diagnostics.verbose:
        diagnostics("params", repr(params))
    attachment = read_attachment(params)
    if attachment is not None:
        diagnostics("input", f"Attached {len(attachment)} characters from {params.attached_file_path}")

    request = build_chat_request(params, attachment)
    reply = client.chat(request)
    diagnostics("output", "Rendering reply" if params.use_renderer else "Printing reply")
    render_output(reply, params.use_renderer, settings.renderer)
    return 0


def main(argv=None, stdin=None) -> int:
    try:
        return run(argv, stdin)
    except (InvalidArgumentError, EmptyPromptError) as e:
        build_parser().print_usage(sys.stderr)
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except AskError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
