"""frontfix: audits, codemods and build verification for React/TypeScript frontends."""

__version__ = "0.1.0"
