import pytest

from ds2openai.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 6000
    assert settings.default_model == "gpt-3.5-turbo"
    assert settings.raw_response is False
    assert settings.get_completions_url() == "https://api.deepseek.com/v1/chat/completions"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEEPSEEK_BASE_URL", "http://localhost:9000/v1/")
    monkeypatch.setenv("RAW_RESPONSE", "true")

    settings = Settings(_env_file=None)

    assert settings.get_completions_url() == "http://localhost:9000/v1/chat/completions"
    assert settings.raw_response is True


@pytest.mark.parametrize("argv,expected", [
    (["--port", "7000"], {"port": 7000}),
    (["-m", "deepseek-reasoner", "-r"], {"default_model": "deepseek-reasoner", "raw_response": True}),
    (["-u", "http://proxy/v1"], {"deepseek_base_url": "http://proxy/v1"}),
])
def test_command_line_overrides(argv, expected):
    import main

    cli_settings = main.load_settings(main.parse_args(argv))

    for key, value in expected.items():
        assert getattr(cli_settings, key) == value


def test_no_command_line_overrides_keeps_settings():
    import main

    assert main.load_settings(main.parse_args([])) is main.settings


def test_overrides_are_exported_to_environment():
    import main

    environ = {}
    main.export_overrides(main.parse_args(["-p", "7000", "-r"]), environ)

    assert environ == {"PORT": "7000", "RAW_RESPONSE": "True"}


def test_exported_overrides_are_read_back(monkeypatch):
    import main

    environ = {}
    main.export_overrides(main.parse_args(["-m", "deepseek-reasoner", "-r"]), environ)
    for key, value in environ.items():
        monkeypatch.setenv(key, value)

    settings = Settings(_env_file=None)
    assert settings.default_model == "deepseek-reasoner"
    assert settings.raw_response is True


def test_app_is_built_once_on_first_access():
    import main
    from fastapi import FastAPI

    assert isinstance(main.app, FastAPI)
    assert main.app is main.app


def test_unknown_module_attribute_raises():
    import main

    with pytest.raises(AttributeError):
        main.not_there
