"""Test data factories and fake time sources"""

from typing import List

from roteiro.jobs import Clock, Scheduler
from roteiro.models import ScriptParameters


class FakeClock(Clock):
    """Clock that only moves when told to"""

    def __init__(self, start: float = 1000.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeScheduler(Scheduler):
    """Sleeping advances the paired FakeClock instead of waiting"""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.sleeps: List[float] = []
        self.on_sleep = None  # optional hook called after each sleep

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.clock.advance(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))


def make_script_params(**overrides) -> ScriptParameters:
    """Filled script form with the three required fields set"""
    defaults = dict(
        topic="Como montar uma carteira de ETFs",
        duration="5-10",
        style="Educativo",
    )
    defaults.update(overrides)
    return ScriptParameters(**defaults)


def leonardo_submitted(generation_id: str = "gen-123") -> dict:
    return {"sdGenerationJob": {"generationId": generation_id, "apiCreditCost": 10}}


def leonardo_pending() -> dict:
    return {"generations_by_pk": {"status": "PENDING", "generated_images": []}}


def leonardo_complete(url: str = "https://cdn.leonardo.ai/users/img-1.jpg") -> dict:
    return {
        "generations_by_pk": {
            "status": "COMPLETE",
            "generated_images": [{"id": "img-1", "url": url}],
        }
    }


def leonardo_failed(status: str = "FAILED") -> dict:
    return {"generations_by_pk": {"status": status, "generated_images": []}}


SAMPLE_SCRIPT = """# Roteiro: Carteira de ETFs

## Hook inicial
Você sabia que dá para investir no mundo inteiro com um único ativo?

## Introdução
Hoje vamos ver como montar uma carteira simples.

1. Escolhendo os ETFs
Comece pelos índices amplos.

Tópico: Rebalanceamento anual
Uma vez por ano, volte aos pesos originais.

## Conclusão
Inscreva-se no canal!
"""
