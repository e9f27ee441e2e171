from typer.testing import CliRunner

import clonesome.cli as cli
from clonesome import __version__
from clonesome.config import settings
from clonesome.models import GenerationResult

runner = CliRunner()


def test_version():
    result = runner.invoke(cli.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_generate_without_token_exits(monkeypatch):
    monkeypatch.setattr(settings.provider, "api_token", None)
    result = runner.invoke(cli.app, ["generate", "-p", "a bard"])
    assert result.exit_code == 1
    assert "No provider token configured" in result.output


def test_generate_prints_image_url(monkeypatch):
    seen = []

    async def _generate_image_core(request):
        seen.append(request)
        return GenerationResult(success=True, image_url="https://img.test/a.png")

    monkeypatch.setattr(settings.provider, "api_token", "test-token")
    monkeypatch.setattr(cli, "generate_image_core", _generate_image_core)
    result = runner.invoke(cli.app, ["generate", "-p", "a bard", "--style", "anime"])

    assert result.exit_code == 0
    assert "https://img.test/a.png" in result.output
    assert seen[0].style == "anime"


def test_generate_reports_failure(monkeypatch):
    async def _generate_image_core(request):
        return GenerationResult(success=False, error="NSFW content detected", status_code=500)

    monkeypatch.setattr(settings.provider, "api_token", "test-token")
    monkeypatch.setattr(cli, "generate_image_core", _generate_image_core)
    result = runner.invoke(cli.app, ["generate", "-p", "a bard"])

    assert result.exit_code == 1
    assert "NSFW content detected" in result.output


def test_chat_command():
    result = runner.invoke(cli.app, ["chat", "hello", "--personality", "warm"])
    assert result.exit_code == 0
    assert "That's wonderful!" in result.output


def test_show_config():
    result = runner.invoke(cli.app, ["show-config"])
    assert result.exit_code == 0
    assert settings.provider.model_version in result.output


def test_generate_save_downloads_into_output_dir(monkeypatch, tmp_path, image_host):
    async def _generate_image_core(request):
        return GenerationResult(success=True, image_url="https://img.test/ok.png")

    monkeypatch.setattr(settings.provider, "api_token", "test-token")
    monkeypatch.setattr(settings, "output_dir", str(tmp_path))
    monkeypatch.setattr(cli, "generate_image_core", _generate_image_core)
    result = runner.invoke(cli.app, ["generate", "-p", "a bard", "--save", "-o", "hero.png"])

    assert result.exit_code == 0
    assert (tmp_path / "hero.png").exists()


def test_generate_save_reports_failed_download(monkeypatch, tmp_path, image_host):
    async def _generate_image_core(request):
        return GenerationResult(success=True, image_url="https://img.test/gone.png")

    monkeypatch.setattr(settings.provider, "api_token", "test-token")
    monkeypatch.setattr(settings, "output_dir", str(tmp_path))
    monkeypatch.setattr(cli, "generate_image_core", _generate_image_core)
    result = runner.invoke(cli.app, ["generate", "-p", "a bard", "--save", "-o", "hero.png"])

    assert result.exit_code == 0
    assert "Download failed" in result.output
    assert not (tmp_path / "hero.png").exists()
