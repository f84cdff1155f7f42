"""Per-family pricing table and cost estimation."""

from __future__ import annotations

from ccradar.models.categories import CategoryKey, classify

# Prices per million tokens (USD), keyed by model family.
# Source: Anthropic pricing page
CATEGORY_PRICING: dict[CategoryKey, dict[str, float]] = {
    CategoryKey.OPUS: {
        "input": 15.0,
        "output": 75.0,
        "cache_read": 1.5,
        "cache_creation": 18.75,
    },
    CategoryKey.SONNET: {
        "input": 3.0,
        "output": 15.0,
        "cache_read": 0.3,
        "cache_creation": 3.75,
    },
    CategoryKey.HAIKU: {
        "input": 0.80,
        "output": 4.0,
        "cache_read": 0.08,
        "cache_creation": 1.0,
    },
}

# Unknown models are priced like Sonnet
DEFAULT_PRICING: dict[str, float] = CATEGORY_PRICING[CategoryKey.SONNET]


def get_pricing(model: str) -> dict[str, float]:
    """Get pricing for a model string via its family, falling back to default."""
    return CATEGORY_PRICING.get(classify(model).key, DEFAULT_PRICING)


def estimate_cost(
    model: str,
    input_tokens: int = 0,
    output_tokens: int = 0,
    cache_read_tokens: int = 0,
    cache_creation_tokens: int = 0,
) -> dict[str, float]:
    """Estimate the USD cost of one API call.

    Returns:
        Dict with input_cost, output_cost, cache_read_cost, cache_creation_cost, total_cost.
    """
    pricing = get_pricing(model)
    tokens = {
        "input": input_tokens,
        "output": output_tokens,
        "cache_read": cache_read_tokens,
        "cache_creation": cache_creation_tokens,
    }
    costs = {f"{kind}_cost": count / 1_000_000 * pricing[kind] for kind, count in tokens.items()}
    costs["total_cost"] = sum(costs.values())
    return costs
