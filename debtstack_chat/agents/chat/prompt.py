"""System prompt and starter prompt library for the credit chat assistant."""

from dataclasses import asdict, dataclass
from enum import StrEnum


def build_system_prompt(
    custom_instructions: str | None = None,
) -> str:
    """Build the system prompt for the chat assistant.

    Args:
        custom_instructions: Optional additional instructions to append

    Returns:
        Complete system prompt string
    """
    base_prompt = """You are a credit data assistant powered by DebtStack.ai. You help users analyze corporate debt structures, bond pricing, and credit risk using the DebtStack API.

## Data Conventions
- **Amounts are in cents**: Divide by 100,000,000,000 (100 billion) to get billions. Example: 500,000,000,000 cents = $5.00 billion.
- **Rates are in basis points**: Divide by 100 to get percentage. Example: 850 bps = 8.50%.
- **Pricing**: Bond prices are shown as % of par (e.g., 94.25 means $942.50 per $1,000 face).

## Coverage
- Roughly 200 companies (S&P 100 + NASDAQ 100 overlap)
- ~6,000 debt instruments with CUSIP/ISIN identifiers, most with FINRA TRACE pricing
- ~14,500 searchable SEC filing sections

## Tool Usage
- Avoid redundant calls. If you already have the data, don't re-fetch it.
- When comparing companies, request them in a single call with comma-separated tickers.
- For bond lookups by identifier, use `resolve_bond`. For screening, use `search_bonds`.
- For pricing, use `search_pricing` or `search_bonds` with `has_pricing=true`.
- Lists are capped at 20 items. When a result carries `_truncated`, say how many were shown out of the total.
- Each call is billed to the user. Plan your sequence before starting.

## Response Guidelines
- Present data clearly with tables or bullet points when appropriate.
- Always convert cents to human-readable dollar amounts and basis points to percentages.
- Cite the data source (e.g., "Based on FINRA TRACE data" or "From SEC 10-K filing").
- If data is unavailable for a company, say so clearly rather than guessing.
- Keep responses concise but informative.

## Suggested Follow-ups
After answering, suggest 2-3 natural follow-up questions. Output them as an HTML comment at the very end of your response in this exact format:
<!--suggestions:["Question 1?","Question 2?","Question 3?"]-->
Do NOT mention this format to the user.

## Out-of-Coverage Companies
If DebtStack tools return no data for a company:
1. Tell the user DebtStack doesn't have detailed data on that company yet.
2. Use `research_company` to read the company's latest 10-K or 20-F directly from SEC EDGAR.
3. Label those results as "Live SEC filing research" (not DebtStack data) and note they are extracted automatically."""

    if custom_instructions:
        return f"{base_prompt}\n\n{custom_instructions}"

    return base_prompt


class PromptCategory(StrEnum):
    SCREENING = "screening"
    DEEP_DIVE = "deep_dive"
    COVENANTS = "covenants"
    COMPARISONS = "comparisons"


CATEGORY_LABELS: dict[PromptCategory, dict[str, str]] = {
    PromptCategory.SCREENING: {"label": "Screening", "icon": "🔍"},
    PromptCategory.DEEP_DIVE: {"label": "Deep Dive", "icon": "🏢"},
    PromptCategory.COVENANTS: {"label": "Covenants", "icon": "📜"},
    PromptCategory.COMPARISONS: {"label": "Comparisons", "icon": "⚖️"},
}


@dataclass(frozen=True)
class StarterPrompt:
    id: str
    label: str
    prompt: str
    category: PromptCategory
    icon: str


STARTER_PROMPTS: tuple[StarterPrompt, ...] = (
    StarterPrompt("s1", "Highest leverage MAG7", "Which MAG7 company has the highest leverage ratio?", PromptCategory.SCREENING, "📊"),
    StarterPrompt("s2", "High-yield bonds", "Find bonds yielding above 8%", PromptCategory.SCREENING, "💰"),
    StarterPrompt("s3", "Structural subordination", "Which companies have structural subordination risk?", PromptCategory.SCREENING, "⚠️"),
    StarterPrompt("s4", "Near-term maturities", "Show me bonds maturing before 2027", PromptCategory.SCREENING, "📅"),
    StarterPrompt("d1", "RIG bond pricing", "Show me Transocean's bond pricing", PromptCategory.DEEP_DIVE, "🛢️"),
    StarterPrompt("d2", "Apple debt structure", "What's Apple's debt structure and leverage ratio?", PromptCategory.DEEP_DIVE, "🍎"),
    StarterPrompt("d3", "Charter corporate structure", "Show me Charter Communications' corporate structure", PromptCategory.DEEP_DIVE, "🏗️"),
    StarterPrompt("d4", "Tesla bond guarantors", "Who guarantees Tesla's bonds?", PromptCategory.DEEP_DIVE, "🔋"),
    StarterPrompt("d5", "Research GM debt (SEC)", "Research General Motors' debt structure from their SEC filings", PromptCategory.DEEP_DIVE, "🔬"),
    StarterPrompt("c1", "Charter covenants", "What are Charter Communications' financial covenants?", PromptCategory.COVENANTS, "📋"),
    StarterPrompt("c2", "Leverage covenant screen", "Find companies with a leverage covenant below 5x", PromptCategory.COVENANTS, "📏"),
    StarterPrompt("c3", "Change of control", "Search for change of control provisions in RIG's indentures", PromptCategory.COVENANTS, "🔄"),
    StarterPrompt("m1", "Offshore driller leverage", "Compare leverage for RIG, VAL, and DO", PromptCategory.COMPARISONS, "🔧"),
    StarterPrompt("m2", "Tightest energy covenants", "Which energy company has the tightest financial covenants?", PromptCategory.COMPARISONS, "⛽"),
    StarterPrompt("m3", "Tech debt comparison", "Compare total debt for AAPL, MSFT, GOOGL, and AMZN", PromptCategory.COMPARISONS, "💻"),
)


def starter_prompt_library() -> dict[str, dict]:
    """Category labels and the starter prompts grouped by category, in display order."""
    grouped: dict[str, list[dict[str, str]]] = {category.value: [] for category in PromptCategory}
    for prompt in STARTER_PROMPTS:
        grouped[prompt.category.value].append(asdict(prompt))
    return {
        "categories": {category.value: dict(labels) for category, labels in CATEGORY_LABELS.items()},
        "prompts": grouped,
    }
