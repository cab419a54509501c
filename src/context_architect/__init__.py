"""Context Architect: structural analysis of AI-agent context files."""

__version__ = "0.3.0"
