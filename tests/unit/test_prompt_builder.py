"""Tests for script prompt construction"""

from roteiro.models import ScriptParameters
from roteiro.prompt_builder import GUIDELINES, REQUIRED_SECTIONS, build_prompt
from tests.mocks.fixtures import make_script_params


class TestBuildPrompt:

    def test_required_fields_rendered(self, script_params):
        prompt = build_prompt(script_params)

        assert "**Tópico:** Como montar uma carteira de ETFs" in prompt
        assert "**Duração:** 5-10 minutos" in prompt
        assert "**Estilo:** Educativo" in prompt

    def test_placeholders_for_empty_optionals(self, script_params):
        prompt = build_prompt(script_params)

        assert "**Palavras-chave do estilo:** Nenhuma" in prompt
        assert "**Idioma:** Português (Brasil)" in prompt
        assert "**Nicho:** Não informado" in prompt
        assert "**Nanonicho:** Não informado" in prompt
        assert "**Link de referência (YouTube):** Nenhum" in prompt
        assert "**Público qualificado:** Não" in prompt
        assert "**Público-alvo:** Geral" in prompt
        assert "**Informações adicionais:** Nenhuma" in prompt

    def test_whitespace_only_kept_as_typed(self):
        prompt = build_prompt(make_script_params(niche="   ", language=""))

        assert "**Nicho:**    \n" in prompt
        assert "**Nicho:** Não informado" not in prompt
        assert "**Idioma:** Português (Brasil)" in prompt

    def test_filled_optionals(self):
        params = make_script_params(
            language="Inglês",
            niche="Finanças",
            subniche="ETFs",
            qualified=True,
            youtube_link="https://youtu.be/abc",
        )

        prompt = build_prompt(params)

        assert "**Idioma:** Inglês" in prompt
        assert "**Nicho:** Finanças" in prompt
        assert "**Sobrenicho:** ETFs" in prompt
        assert "**Público qualificado:** Sim" in prompt
        assert "**Link de referência (YouTube):** https://youtu.be/abc" in prompt

    def test_sections_numbered_in_order(self, script_params):
        prompt = build_prompt(script_params)

        positions = [prompt.index(f"{i}. {s}") for i, s in enumerate(REQUIRED_SECTIONS, start=1)]
        assert positions == sorted(positions)
        assert all(line in prompt for line in GUIDELINES)

    def test_deterministic(self, script_params):
        assert build_prompt(script_params) == build_prompt(script_params)

    def test_framing(self, script_params):
        prompt = build_prompt(script_params)

        assert prompt.startswith(
            "\nCrie um roteiro detalhado para um vídeo do YouTube com as seguintes especificações:\n"
        )
        assert prompt.endswith("\n")


class TestScriptParameters:

    def test_missing_required(self):
        assert ScriptParameters(topic="x", duration=" ").missing_required() == ["duration", "style"]
        assert make_script_params().missing_required() == []
