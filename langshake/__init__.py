"""Langshake: content-addressed, Merkle-verified JSON-LD publishing.

Publishes the structured data of a site's pages as per-page JSON modules,
skips modules unchanged since the last run, and writes a
``.well-known/llm.json`` index whose Merkle root lets a third party
verify the whole module set.
"""

__version__ = "0.1.0"
__description__ = "Content-addressed, Merkle-verified JSON-LD publishing for LLMs"

from langshake.core.orchestrator import Publisher
from langshake.cli.app import app as cli

__all__ = ["Publisher", "cli", "__version__"]
