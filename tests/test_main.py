from main import build_configs, parse_args


class TestCli:
    def test_defaults(self):
        window, session = build_configs(parse_args([]))
        assert session.block.n_trials == 30
        assert session.block.switch_rate == 0.35
        assert session.feedback_ms == 500
        assert session.export_path is None
        assert window.title == "Category Switch"

    def test_overrides(self):
        args = parse_args(
            ["--seed", "9", "--trials", "12", "--switch-rate", "0.5", "--feedback-ms", "250",
             "--width", "1024", "--height", "768", "--export", "out/sessions.jsonl"]
        )
        window, session = build_configs(args)
        assert session.seed == 9
        assert session.block.n_trials == 12
        assert session.block.switch_rate == 0.5
        assert session.feedback_ms == 250
        assert session.export_path == "out/sessions.jsonl"
        assert (window.width, window.height) == (1024, 768)
