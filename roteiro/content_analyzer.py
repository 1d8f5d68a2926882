"""
Content Analyzer - heuristic topic extraction and niche classification

Pure functions, no I/O and no state between calls:

- ``extract_topics`` finds the narrative sections of a generated script so
  each one can seed an image prompt.
- ``classify`` maps a reference video's title/description/tags onto the
  niche taxonomy used by the script form.

The keyword sets and thresholds are hand-tuned; they live in
``ClassificationRules`` so they can be reviewed and replaced without
touching the algorithm.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from roteiro.models import ScriptAnalysis, Topic


# ============================================================
# Topic extraction
# ============================================================

HEADING_PATTERN = re.compile(r"^#{1,6}\s+")
NUMBERED_PATTERN = re.compile(r"^[0-9]+[.)]\s+")
SECTION_KEYWORD_PATTERN = re.compile(
    r"^(t[óo]pico|se[cç][aã]o|cap[íi]tulo|parte)[:\-]\s+",
    re.IGNORECASE,
)

# Checked in order; the first match classifies the line
LINE_RULES: Tuple[Pattern, ...] = (
    HEADING_PATTERN,
    NUMBERED_PATTERN,
    SECTION_KEYWORD_PATTERN,
)

LINE_SPLIT = re.compile(r"\r?\n")
PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
SENTENCE_END = re.compile(r"[.!?]")

MIN_TITLE_LENGTH = 3          # titles must be strictly longer
MAX_FALLBACK_PARAGRAPHS = 6
MAX_FALLBACK_TITLE_CHARS = 90
MAX_TOPICS = 20


def _line_title(line: str) -> Optional[str]:
    for pattern in LINE_RULES:
        if pattern.match(line):
            return pattern.sub("", line, count=1).strip()
    return None


def _paragraph_title(paragraph: str) -> str:
    return SENTENCE_END.split(paragraph, maxsplit=1)[0][:MAX_FALLBACK_TITLE_CHARS].strip()


def extract_topic_titles(script: str) -> List[str]:
    """
    Section titles of a script, in document order.

    Each stripped line is matched against markdown headings, numbered
    items and section keywords (tópico/seção/capítulo/parte). Titles of
    3 characters or fewer and exact repeats are dropped. When nothing
    matches, the first sentence of each of the first six paragraphs is
    used instead. At most 20 titles are returned.
    """
    if not script or not script.strip():
        return []

    titles: List[str] = []
    seen = set()

    def accept(title: str) -> None:
        if len(title) > MIN_TITLE_LENGTH and title not in seen:
            titles.append(title)
            seen.add(title)

    for raw in LINE_SPLIT.split(script):
        line = raw.strip()
        if not line:
            continue
        title = _line_title(line)
        if title is not None:
            accept(title)

    if not titles:
        paragraphs = [p.strip() for p in PARAGRAPH_SPLIT.split(script) if p.strip()]
        for paragraph in paragraphs[:MAX_FALLBACK_PARAGRAPHS]:
            accept(_paragraph_title(paragraph))

    return titles[:MAX_TOPICS]


def extract_topics(script: str) -> List[Topic]:
    """Topics for every detected section, each prompt starting as its title"""
    return [Topic(title=title) for title in extract_topic_titles(script)]


# ============================================================
# Classification
# ============================================================

@dataclass(frozen=True)
class NicheCategory:
    name: str
    pattern: Pattern


def _ci(expression: str) -> Pattern:
    return re.compile(expression, re.IGNORECASE)


@dataclass(frozen=True)
class ClassificationRules:
    """
    Tunable inputs of ``classify``.

    ``categories`` order is the tie-break: the first matching category wins.
    """
    categories: Tuple[NicheCategory, ...]
    advanced_pattern: Pattern
    fallback_niche: str = "Geral"
    qualified_tag_threshold: int = 8


DEFAULT_CATEGORIES: Tuple[NicheCategory, ...] = (
    NicheCategory("Finanças", _ci(r"(finan|invest|ação|bolsa|etf|trader|cripto|bitcoin|cagr|dividend)")),
    NicheCategory("Tecnologia", _ci(r"(tecno|program|dev|javascript|python|ia|a[ií]|algorit|api|kubernetes|docker|cloud)")),
    NicheCategory("Saúde e Fitness", _ci(r"(saúde|saude|fitness|treino|dieta|nutri|muscula|hiit)")),
    NicheCategory("Marketing", _ci(r"(marketing|venda|tráfego|trafego|anúncio|anuncio|copy|roi|funil)")),
    NicheCategory("Games", _ci(r"(game|jogo|gamer|stream|fortnite|minecraft|valorant)")),
)

ADVANCED_TERMINOLOGY = _ci(
    r"(avançad|intermediár|framework|api|derivad|cagr|roi|backtest|regress|estatístic"
    r"|neural|kubernetes|docker|otimiza|quantitativo|hedge|opções|futuros|fine-?tune"
    r"|prompt engineering|llm)"
)

DEFAULT_RULES = ClassificationRules(
    categories=DEFAULT_CATEGORIES,
    advanced_pattern=ADVANCED_TERMINOLOGY,
)


def classify_niche(text: str, tags: Sequence[str], rules: ClassificationRules = DEFAULT_RULES) -> str:
    lowered = (text or "").lower()
    lowered_tags = [tag.lower() for tag in tags]
    for category in rules.categories:
        if category.pattern.search(lowered) or any(category.pattern.search(t) for t in lowered_tags):
            return category.name
    return rules.fallback_niche


def classify(
    text: str,
    tags: Optional[Sequence[str]] = None,
    rules: ClassificationRules = DEFAULT_RULES
) -> ScriptAnalysis:
    """
    Classify imported metadata into niche fields.

    Args:
        text: Title and description, typically joined by a newline
        tags: Video tags; the first three become sub/micro/nanoniche
        rules: Category patterns and qualification thresholds

    Returns:
        ScriptAnalysis snapshot
    """
    tags = list(tags or [])
    return ScriptAnalysis(
        niche=classify_niche(text, tags, rules),
        subniche=tags[0] if len(tags) > 0 else "",
        microniche=tags[1] if len(tags) > 1 else "",
        nanoniche=tags[2] if len(tags) > 2 else "",
        qualified=bool(rules.advanced_pattern.search(text or ""))
        or len(tags) >= rules.qualified_tag_threshold,
    )
