"""Send a prompt (and optionally a file) to the xAI Grok chat API from the shell."""

__version__ = "0.1.0"
