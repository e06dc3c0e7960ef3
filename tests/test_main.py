from video_edge import main as main_mod


def test_cli_overrides_environment(monkeypatch, tmp_path):
    env_file = tmp_path / "proxy.env"
    env_file.write_text("EDGE_PROXY_PORT=9100\nNORTHFLANK_SERVICE_URL=http://from-dotenv\n")
    monkeypatch.setenv("EDGE_PROXY_HOST", "10.0.0.1")

    args = main_mod.build_parser().parse_args(["--env-file", str(env_file), "--port", "9200", "--log-level", "debug"])
    config = main_mod.load_config(args)

    assert config.host == "10.0.0.1"
    assert config.port == 9200
    assert config.log_level == "DEBUG"
    assert config.backend_url == "http://from-dotenv"


def test_main_runs_threaded_server(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    ran = {}

    class DummyApp:
        def run(self, host=None, port=None, threaded=None):
            ran.update(host=host, port=port, threaded=threaded)

    monkeypatch.setattr(main_mod, "create_app", lambda: DummyApp())

    assert main_mod.main(["--host", "127.0.0.1", "--port", "8000"]) == 0
    assert ran == {"host": "127.0.0.1", "port": 8000, "threaded": True}
