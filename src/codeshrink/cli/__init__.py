"""CodeShrink CLI - codeshrink command."""
