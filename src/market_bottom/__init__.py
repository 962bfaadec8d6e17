"""Market Bottom MCP Server.

Ask your AI whether the market is bottoming — a composite 0-100 gauge built
from Fear & Greed, VIX, RSI, and the equity put/call ratio.
"""

__version__ = "0.1.0"
