"""Prompt construction for script generation"""

from typing import List, Tuple

from roteiro.models import ScriptParameters


NOT_INFORMED = "Não informado"
NONE_FEMININE = "Nenhuma"
NONE_MASCULINE = "Nenhum"
DEFAULT_LANGUAGE = "Português (Brasil)"
DEFAULT_AUDIENCE = "Geral"

# Narrative sections the provider must produce, in this order
REQUIRED_SECTIONS: Tuple[str, ...] = (
    "Hook inicial (primeiros 15 segundos)",
    "Introdução e apresentação do problema/tópico",
    "Desenvolvimento do conteúdo principal (dividido em seções)",
    "Call-to-action para inscrição e likes",
    "Conclusão e próximos passos",
    "Outro (final do vídeo)",
)

GUIDELINES: Tuple[str, ...] = (
    "Formate o roteiro de forma clara, com indicações de tempo aproximado para cada seção.",
    "Use uma linguagem envolvente e adequada para YouTube.",
    "Inclua sugestões de elementos visuais quando relevante.",
    "Adapte o tom e a linguagem conforme as palavras-chave do estilo fornecidas.",
    "Adapte o conteúdo ao nicho e subnichos especificados.",
    "Se houver link do YouTube, use-o apenas como referência (sem copiar), destacando diferenciais e atualizações.",
    "Se o público for qualificado, aprofunde a terminologia e a complexidade; caso contrário, simplifique e use exemplos práticos.",
    "Escreva todo o roteiro no idioma especificado pelo usuário.",
)


def _or(value: str, fallback: str) -> str:
    return value or fallback


def _field_lines(params: ScriptParameters) -> List[Tuple[str, str]]:
    return [
        ("Tópico", params.topic),
        ("Duração", f"{params.duration} minutos"),
        ("Estilo", params.style),
        ("Palavras-chave do estilo", _or(params.style_keywords, NONE_FEMININE)),
        ("Idioma", _or(params.language, DEFAULT_LANGUAGE)),
        ("Nicho", _or(params.niche, NOT_INFORMED)),
        ("Sobrenicho", _or(params.subniche, NOT_INFORMED)),
        ("Micronicho", _or(params.microniche, NOT_INFORMED)),
        ("Nanonicho", _or(params.nanoniche, NOT_INFORMED)),
        ("Link de referência (YouTube)", _or(params.youtube_link, NONE_MASCULINE)),
        ("Público qualificado", "Sim" if params.qualified else "Não"),
        ("Público-alvo", _or(params.audience, DEFAULT_AUDIENCE)),
        ("Informações adicionais", _or(params.additional_info, NONE_FEMININE)),
    ]


def build_prompt(params: ScriptParameters) -> str:
    """
    Render script parameters into the single prompt sent to a text provider.

    Deterministic: the same parameters always give the same string. Empty
    optional fields are replaced by readable placeholders; whitespace-only
    values are kept as typed.
    """
    lines = [
        "",
        "Crie um roteiro detalhado para um vídeo do YouTube com as seguintes especificações:",
        "",
    ]
    lines.extend(f"**{label}:** {value}" for label, value in _field_lines(params))
    lines.append("")
    lines.append("O roteiro deve incluir:")
    lines.extend(f"{i}. {section}" for i, section in enumerate(REQUIRED_SECTIONS, start=1))
    lines.append("")
    lines.extend(GUIDELINES)
    lines.append("")
    return "\n".join(lines)
