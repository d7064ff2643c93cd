"""Tests for the gesturelab CLI (classify and rules; no camera needed)."""

import argparse
import json

import pytest

from gesturelab.cli import _build_parser, _load_config, _resolve_input, main
from gesturelab.testing import make_hand_landmarks


def _write_frames(tmp_path, frames):
    path = tmp_path / "frames.json"
    path.write_text(json.dumps(frames))
    return str(path)


class TestParser:
    def test_run_defaults(self):
        args = _build_parser().parse_args(["run", "-i", "0"])
        assert args.command == "run"
        assert args.viz == "text"
        assert args.threshold is None

    def test_run_requires_input(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["run"])

    def test_resolve_input(self):
        assert _resolve_input("0") == 0
        assert _resolve_input("clip.mp4") == "clip.mp4"

    def test_load_config_overrides(self, tmp_path):
        path = tmp_path / "gesture.yaml"
        path.write_text("stability_threshold: 5\nmax_hands: 2\n")
        args = argparse.Namespace(config=str(path), threshold=2, fps=None)
        config = _load_config(args)
        assert config.stability_threshold == 2
        assert config.max_hands == 2


class TestMain:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 0
        assert "usage" in capsys.readouterr().out

    def test_rules(self, capsys):
        main(["rules"])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 7
        assert "all_extended" in lines[0] and "open_hand" in lines[0]
        assert "otherwise" in lines[-1] and "0.50" in lines[-1]

    def test_classify(self, tmp_path, capsys):
        fist = make_hand_landmarks().tolist()
        path = _write_frames(tmp_path, [fist, fist, None])
        main(["classify", path, "--threshold", "2"])
        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "  frame=0 raw=fist (0.90) stable=none",
            "  frame=1 raw=fist (0.90) stable=fist",
            "  frame=2 no hand",
        ]

    def test_classify_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["classify", str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_classify_not_a_list(self, tmp_path):
        path = _write_frames(tmp_path, {"frames": []})
        with pytest.raises(SystemExit) as exc:
            main(["classify", path])
        assert exc.value.code == 1

    def test_classify_bad_threshold(self, tmp_path):
        path = _write_frames(tmp_path, [])
        with pytest.raises(SystemExit) as exc:
            main(["classify", path, "--threshold", "0"])
        assert exc.value.code == 1

    @pytest.mark.parametrize("viz", ["text", "live"])
    def test_run_missing_input(self, tmp_path, capsys, viz):
        with pytest.raises(SystemExit) as exc:
            main(["run", "-i", str(tmp_path / "nope.mp4"), "--viz", viz])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_run_bad_config_type(self, tmp_path, capsys):
        path = tmp_path / "gesture.yaml"
        path.write_text('stability_threshold: "3"\n')
        with pytest.raises(SystemExit) as exc:
            main(["run", "-i", "0", "-c", str(path)])
        assert exc.value.code == 1
        assert "stability_threshold" in capsys.readouterr().err
