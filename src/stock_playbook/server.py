"""Stock Playbook MCP Server using FastMCP."""

import json
import logging
import os
from typing import Any

from fastmcp import FastMCP

from stock_playbook import SCHEMA_VERSION, SERVER_VERSION
from stock_playbook.tools.report import analyze_stock, fundamental_scores, technical_scores

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="stock-playbook",
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def get_stock_analysis(
    symbol: str,
    bars: list[dict[str, Any]],
    fundamentals: dict[str, Any],
    price: float | None = None,
    indicators: dict[str, Any] | None = None,
) -> str:
    """
    Score a stock and build short/medium/long horizon playbooks.

    Args:
        symbol: Stock ticker symbol
        bars: Chronological daily bars with date, open, high, low, close,
            and optional volume / isBreakout
        fundamentals: peRatio, roe, deRatio, profitGrowth3Y, sectorPE,
            historicalPE (plus optional growth and holding fields)
        price: Current price (defaults to the last close)
        indicators: Optional precomputed ema20 / ema50

    Returns:
        JSON with technical and fundamental scores, valuation, and scenarios
    """
    result = await analyze_stock(
        symbol=symbol,
        bars=bars,
        fundamentals=fundamentals,
        price=price,
        indicators=indicators,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_technical_scores(
    symbol: str,
    bars: list[dict[str, Any]],
    price: float | None = None,
    indicators: dict[str, Any] | None = None,
) -> str:
    """
    Calculate momentum, trend and breakout scores from a bar series.

    Args:
        symbol: Stock ticker symbol
        bars: Chronological daily bars
        price: Current price (defaults to the last close)
        indicators: Optional precomputed ema20 / ema50

    Returns:
        JSON with technical scores, the rules that fired and a signal synopsis
    """
    result = await technical_scores(symbol=symbol, bars=bars, price=price, indicators=indicators)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_fundamental_scores(symbol: str, fundamentals: dict[str, Any]) -> str:
    """
    Score quality, growth, value and stability from fundamental ratios.

    Args:
        symbol: Stock ticker symbol
        fundamentals: Fundamental ratios

    Returns:
        JSON with fundamental scores and valuation snapshot
    """
    result = await fundamental_scores(symbol=symbol, fundamentals=fundamentals)
    return json.dumps(result, indent=2, default=str)


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Stock Playbook MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    mcp.run()


if __name__ == "__main__":
    main()
