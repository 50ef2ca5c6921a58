"""Allow ``python -m services.harmonic_mcp.src``."""

from .main import main

main()
