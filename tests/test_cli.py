"""Tests for the command line entry point."""

import pytest

from chronoblog.cli import Command, main


@pytest.fixture
def argv(tmp_path, posts_dir):
    return [
        "--config",
        str(tmp_path / "missing.toml"),
        "--posts",
        str(posts_dir),
        "--output",
        str(tmp_path / "site"),
        "--assets",
        str(tmp_path / "assets"),
        "--site-url",
        "https://cli.example.com",
    ]


class TestCommand:
    def test_parse(self):
        assert Command.parse("tags") is Command.TAGS
        assert Command.parse("build") is Command.BUILD

    def test_unknown_falls_back_to_build(self):
        assert Command.parse("serve") is Command.BUILD
        assert Command.parse(None) is Command.BUILD


class TestMain:
    def test_build_is_default(self, argv, tmp_path, capsys):
        main(argv)
        out = capsys.readouterr().out
        assert out.startswith("chronoblog: static site generator\nchronoblog: version ")
        assert "Transforming posts...ok" in out
        assert "Site generated in:" in out
        page = (tmp_path / "site/2020/03/21/foo.html").read_text(encoding="utf-8")
        assert 'href="https://cli.example.com/2020/03/21/foo.html"' in page

    def test_unknown_command_builds(self, argv, tmp_path):
        main(["whatever", "--quiet"] + argv)
        assert (tmp_path / "site/index.html").exists()

    def test_tags_command(self, argv, capsys):
        main(["tags", "--quiet"] + argv)
        out = capsys.readouterr().out
        assert out.splitlines() == ["a\t1", "b\t2", "c\t1"]

    def test_environment_configures_site(self, argv, tmp_path, monkeypatch):
        monkeypatch.setenv("BLOG_TITLE", "Env Blog")
        main(["--quiet"] + argv)
        index = (tmp_path / "site/index.html").read_text(encoding="utf-8")
        assert '<h1 class="all-posts-h">Env Blog</h1>' in index

    def test_error_exits_non_zero(self, argv, posts_dir, tmp_path, capsys):
        (posts_dir / "2022-01-01-broken.md").write_text("no front matter\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["--quiet"] + argv)
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert "2022-01-01-broken.md" in err
        assert not (tmp_path / "site").exists()
