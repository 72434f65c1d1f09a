"""clawcode: LLM edit plans applied to local projects as find/replace patches."""

__version__ = "0.4.0"
