import json

from placement.__main__ import main


def test_exemple(capsys):
    assert main(["exemple", "--graine", "1"]) == 0
    out = capsys.readouterr().out
    assert "=== plan retenu ===" in out
    assert "=== restrictions ===" in out
    assert '"type": "FIXED_SEAT"' in out


def test_generer_depuis_fichier(tmp_path, capsys):
    chemin = tmp_path / "payload.json"
    chemin.write_text(json.dumps({
        "grid": {"rows": 1, "cols": 2, "exists": [True, True]},
        "names_text": "Alice\nBob",
    }), encoding="utf-8")
    assert main(["generer", str(chemin), "--graine", "3"]) == 0
    out = capsys.readouterr().out
    assert "Alice" in out and "Bob" in out


def test_generer_echec(tmp_path, capsys):
    chemin = tmp_path / "payload.json"
    chemin.write_text(json.dumps({
        "grid": {"rows": 1, "cols": 1, "exists": [True]},
        "students": ["Alice", "Bob"],
    }), encoding="utf-8")
    assert main(["generer", str(chemin)]) == 2
    assert "aucune solution" in capsys.readouterr().out


def test_fichier_introuvable(tmp_path):
    assert main(["generer", str(tmp_path / "absent.json")]) == 1
