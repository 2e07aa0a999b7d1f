import asyncio
import json
import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import main
from services import llm_service


@pytest.fixture
def offline(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("PROMPT_RETRY_DELAY", "0")
    monkeypatch.setattr(llm_service, "_llm_service", None)
    return tmp_path


def write_layer(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_run_prompt_generation_without_api_key_uses_fallback(offline):
    """Run the pipeline end-to-end without a configured backend."""

    result = asyncio.run(
        main.run_prompt_generation(
            None,
            {"article_product_type": "Hoodie"},
            {"color": "Black", "material": "Cotton"},
        )
    )

    assert result.source == "fallback"
    assert result.prompts.front.startswith(
        "Ghost mannequin fashion photography, front view of a Black Cotton Hoodie."
    )


def test_main_prints_json_result(offline, capsys):
    predicted = write_layer(offline / "predicted.json", {"article_product_type": "Sneaker", "color": "White"})

    main.main(["--predicted", predicted, "--fallback-only"])

    output = json.loads(capsys.readouterr().out)
    assert output["source"] == "fallback"
    assert set(output["prompts"]) == {"front", "back", "model"}
    assert "White Sneaker" in output["prompts"]["back"]


def test_main_prints_single_view(offline, capsys):
    locked = write_layer(offline / "locked.json", {"article_product_type": "Jeans", "color": "Blue"})

    main.main(["--locked", locked, "--fallback-only", "--view", "front"])

    assert capsys.readouterr().out.startswith("Professional flat lay photography, overhead view of Blue Jeans.")


def test_load_attribute_layer_rejects_non_objects(offline):
    path = write_layer(offline / "layer.json", ["color", "Black"])

    with pytest.raises(ValueError):
        main.load_attribute_layer(path)
    assert main.load_attribute_layer(None) is None
