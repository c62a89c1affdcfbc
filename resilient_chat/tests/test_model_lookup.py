from __future__ import annotations

import pytest

from resilient_chat.openai.model import Model, to_model, to_text


@pytest.mark.parametrize("model", list(Model))
def test_model_round_trips_through_lookup(model):
    assert to_text(to_model(to_text(model))) == to_text(model)
    assert to_model(to_text(model)) is model


def test_known_identifiers():
    assert to_text(Model.TURBO) == "gpt-3.5-turbo"
    assert to_text(Model.TURBO_16K_0613) == "gpt-3.5-turbo-16k-0613"
    assert to_text(Model.FOUR) == "gpt-4"
    assert to_text(Model.FOUR_32K_0613) == "gpt-4-32k-0613"
    assert len(Model) == 8


def test_unknown_identifier_raises():
    with pytest.raises(ValueError):
        to_model("gpt-2")
