"""Smoke tests for the terminal client."""

from cli_partfinder import main


def test_cli_interprets_description(capsys):
    assert main(["fren tutmuyor arka kısımdan ses geliyor"]) == 0

    out = capsys.readouterr().out
    assert "part-fren-001" in out
    assert "keywords: 3" in out


def test_cli_lists_predefined_offers(capsys):
    assert main(["--sellers", "part-fren-001"]) == 0

    out = capsys.readouterr().out
    assert "offers: 3" in out
    assert "min=285 max=340 avg=315" in out


def test_cli_batch_mode(tmp_path, capsys):
    batch = tmp_path / "descriptions.txt"
    batch.write_text("klima soğutmuyor\n\nakü bitti\n", encoding="utf-8")

    assert main(["--batch", str(batch)]) == 0

    out = capsys.readouterr().out
    assert "part-klima-004" in out
    assert "part-elektrik-001" in out
