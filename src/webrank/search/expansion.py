"""
Query Expansion

Expands a raw search query with synonyms, related concepts, alternative
phrasings and entities. Uses an OpenAI chat model when an API key is
configured and falls back to deterministic local rules otherwise.
"""

import json
import logging
import re
from typing import Any, Iterable

from openai import OpenAI

from webrank.analyzer import analyzer
from webrank.core.config import QueryExpansionConfig
from webrank.search.models import ExpandedQuery, ExpansionSource

logger = logging.getLogger(__name__)

OR_SEPARATOR = " OR "
MAX_CONCEPTS_IN_QUERY_TEXT = 3

SYNONYM_TABLE: dict[str, tuple[str, ...]] = {
    "good": ("great", "excellent", "best"),
    "bad": ("poor", "terrible", "worst"),
    "big": ("large", "huge", "enormous"),
    "small": ("tiny", "little", "compact"),
    "fast": ("quick", "rapid", "swift"),
    "slow": ("sluggish", "gradual", "leisurely"),
    "buy": ("purchase", "acquire", "get"),
    "sell": ("offer", "trade", "market"),
    "car": ("vehicle", "automobile", "truck"),
    "house": ("home", "residence", "building"),
    "job": ("work", "career", "position"),
    "money": ("cash", "funds", "currency"),
    "business": ("company", "firm", "enterprise"),
    "person": ("individual", "people", "user"),
}

# Only the first domain found in the query contributes
DOMAIN_CONCEPTS: dict[str, tuple[str, ...]] = {
    "business": ("company", "startup", "entrepreneur", "market", "industry"),
    "technology": ("software", "hardware", "digital", "innovation", "tech"),
    "finance": ("money", "investment", "banking", "capital", "funding"),
    "health": ("medical", "wellness", "healthcare", "fitness", "treatment"),
    "education": ("learning", "school", "teaching", "academic", "training"),
    "marketing": ("advertising", "promotion", "branding", "sales", "market"),
    "science": ("research", "discovery", "laboratory", "experiment", "study"),
    "art": ("design", "creative", "artistic", "visual", "aesthetic"),
}

# Checked in order, first match wins
QUERY_SHAPE_CONCEPTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("how to", ("guide", "tutorial", "instructions", "steps")),
    ("what is", ("definition", "explanation", "meaning", "description")),
    ("best", ("top", "recommended", "highest rated", "premium")),
)

EXPANSION_PROMPT = """You are a query expansion expert for a search engine. Your task is to expand this search query with synonyms and related terms to improve search results.

Query: "{query}"

Please provide:
1. A list of synonyms for key terms in the query (identify each important term and provide up to {max_synonyms} synonyms for each)
2. Related concepts that might be relevant to the query (up to {max_concepts} concepts)
3. Different ways to phrase the same query (up to {max_phrases} alternative phrasings)
4. Specific entities mentioned in the query and their alternatives

Format the response ONLY as JSON with these sections:
{{
  "synonyms": {{
    "term1": ["synonym1", "synonym2", "synonym3"],
    "term2": ["synonym1", "synonym2", "synonym3"]
  }},
  "relatedConcepts": ["concept1", "concept2", "concept3"],
  "alternativePhrases": ["phrase1", "phrase2", "phrase3"],
  "entities": ["entity1", "entity2"]
}}

Keep the response focused and relevant to the original query intent. Do not include any explanations or text outside the JSON structure."""

_JSON_SPAN = re.compile(r"```(?:json)?([\s\S]*?)```|\{[\s\S]*\}")


class ExpansionError(Exception):
    """Raised when a language-model response cannot be turned into an expansion."""


def _unique(items: Iterable[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def _strings(value: Any) -> list[str]:
    """Keep the non-blank strings of a JSON list; anything else becomes []."""
    if not isinstance(value, list):
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


def build_expanded_query_text(
    original: str,
    synonym_groups: Iterable[Iterable[str]],
    related_concepts: Iterable[str],
) -> str:
    """
    Join the original query, every synonym and the first few related
    concepts with " OR " so the result can be handed to a crawler as a
    broadened search string. The original query always comes first.
    """
    parts = [original]
    parts.extend(s for group in synonym_groups for s in group if s.strip())
    top_concepts = list(related_concepts)[:MAX_CONCEPTS_IN_QUERY_TEXT]
    parts.extend(c for c in top_concepts if c.strip())
    return OR_SEPARATOR.join(parts)


def basic_expansion(query: str) -> ExpandedQuery:
    """Minimal expansion used when everything else has failed."""
    return ExpandedQuery(
        original=query,
        alternative_phrases=(query,),
        entities=tuple(analyzer.split_terms(query)),
        expanded_query_text=query,
        source=ExpansionSource.BASIC,
    )


def local_synonyms(term: str, limit: int) -> tuple[str, ...]:
    """
    Synonym candidates for a single term: entries from the static table
    first, then simple morphological variants (plural/singular, "un"
    prefix, -ed/-ing suffixes).
    """
    lower = term.lower()
    candidates = list(SYNONYM_TABLE.get(lower, ()))

    if lower.endswith("s"):
        candidates.append(lower[:-1])
    else:
        candidates.append(lower + "s")

    if not lower.startswith("un"):
        candidates.append("un" + lower)

    if not lower.endswith("ing") and not lower.endswith("ed"):
        if lower.endswith("e"):
            candidates.append(lower + "d")
            candidates.append(lower[:-1] + "ing")
        else:
            candidates.append(lower + "ed")
            candidates.append(lower + "ing")

    out = [c for c in _unique(candidates) if c != lower]
    return tuple(out[: max(0, limit)])


def local_related_concepts(query: str, terms: list[str], limit: int) -> tuple[str, ...]:
    lower_query = query.lower()
    concepts: list[str] = []

    for domain, related in DOMAIN_CONCEPTS.items():
        if domain in lower_query:
            concepts.extend(related)
            break

    for shape, related in QUERY_SHAPE_CONCEPTS:
        if shape in lower_query:
            concepts.extend(related)
            break

    # Adjacent term pairs
    for left, right in zip(terms, terms[1:]):
        concepts.append(f"{left} and {right}")

    return tuple(_unique(concepts)[: max(0, limit)])


def parse_expansion_response(
    response: str,
    original: str,
    config: QueryExpansionConfig,
) -> ExpandedQuery:
    """
    Build an ExpandedQuery from a language-model response.

    The response is not trusted to be clean JSON: a fenced code block is
    preferred, otherwise the outermost brace-delimited span is used.

    Raises:
        ExpansionError: no JSON-like span, invalid JSON, or not an object
    """
    match = _JSON_SPAN.search(response or "")
    if not match:
        raise ExpansionError("No JSON found in language-model response")

    json_str = match.group(1).strip() if match.group(1) else match.group(0)
    if not json_str.startswith("{"):
        json_str = "{" + json_str
    if not json_str.endswith("}"):
        json_str = json_str + "}"

    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ExpansionError(f"Invalid JSON in language-model response: {e}") from e

    if not isinstance(parsed, dict):
        raise ExpansionError("Language-model response is not a JSON object")

    synonyms_map = parsed.get("synonyms")
    if not isinstance(synonyms_map, dict):
        synonyms_map = {}
    limit = max(0, config.max_synonyms_per_term)
    synonym_groups = tuple(
        tuple(_unique(_strings(group))[:limit]) for group in synonyms_map.values()
    )

    related = tuple(_strings(parsed.get("relatedConcepts"))[: config.max_related_concepts])
    phrases: tuple[str, ...] = ()
    if config.include_alternative_phrases:
        phrases = tuple(
            _strings(parsed.get("alternativePhrases"))[: config.max_alternative_phrases]
        )
    entities = tuple(_strings(parsed.get("entities")))

    return ExpandedQuery(
        original=original,
        synonym_groups=synonym_groups,
        related_concepts=related,
        alternative_phrases=phrases,
        entities=entities,
        expanded_query_text=build_expanded_query_text(original, synonym_groups, related),
        source=ExpansionSource.REMOTE,
    )


class QueryExpander:
    """
    Best-effort query expansion.

    expand() always returns a valid ExpandedQuery. The remote path is tried
    exactly once when an API key is configured; any failure there falls
    back to local rules, and any failure in local rules falls back to a
    basic expansion that only echoes the query.
    """

    def __init__(self, config: QueryExpansionConfig | None = None, client: Any = None):
        self.config = config or QueryExpansionConfig()
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            # max_retries=0: one attempt, then fall back locally
            self._client = OpenAI(
                api_key=self.config.api_key,
                timeout=self.config.timeout_sec,
                max_retries=0,
            )
        return self._client

    def expand(self, query: str) -> ExpandedQuery:
        logger.info(f"Expanding query: {query!r}")
        try:
            if self.config.api_key:
                expanded = self._expand_remote(query)
                if expanded is not None:
                    return expanded
            else:
                logger.info("No language-model API key configured, using local expansion")
            return self.expand_local(query)
        except Exception as e:
            logger.error(f"Query expansion failed, using basic expansion: {e}", exc_info=True)
            return basic_expansion(query)

    def expand_local(self, query: str) -> ExpandedQuery:
        terms = analyzer.split_terms(query)
        synonym_groups = tuple(
            local_synonyms(term, self.config.max_synonyms_per_term) for term in terms
        )
        related = local_related_concepts(query, terms, self.config.max_related_concepts)
        phrases = (query,) if self.config.include_alternative_phrases else ()

        return ExpandedQuery(
            original=query,
            synonym_groups=synonym_groups,
            related_concepts=related,
            alternative_phrases=phrases,
            entities=tuple(terms),
            expanded_query_text=build_expanded_query_text(query, synonym_groups, related),
            source=ExpansionSource.LOCAL,
        )

    def _expand_remote(self, query: str) -> ExpandedQuery | None:
        prompt = EXPANSION_PROMPT.format(
            query=query,
            max_synonyms=self.config.max_synonyms_per_term,
            max_concepts=self.config.max_related_concepts,
            max_phrases=self.config.max_alternative_phrases,
        )
        try:
            response = self._complete(prompt)
            logger.debug(f"Raw expansion response: {response[:500]}")
            return parse_expansion_response(response, query, self.config)
        except Exception as e:
            logger.warning(f"Remote query expansion failed, falling back to local: {e}")
            return None

    def _complete(self, prompt: str) -> str:
        logger.info(f"Calling language model {self.config.model} for query expansion")
        response = self.client.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.config.temperature,
            max_tokens=self.config.max_output_tokens,
        )
        return response.choices[0].message.content or ""
