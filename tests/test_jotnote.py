import sys
import os
import json

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from jotnote import jotnote
from jotnote.jotnote import DEFAULT_CONFIG, FSHandler, Notes, NotesShell, main
from jotnote.theme import theme_style


def _write_config(tmp_path, extra_main="mode = cli\n", colors=""):
    config_file = tmp_path / "config"
    config_file.write_text(
        "[main]\n"
        f"data_dir = {tmp_path / 'data'}\n"
        "data_file = db.json\n"
        f"export_dir = {tmp_path / 'exports'}\n"
        f"{extra_main}"
        "\n[colors]\n"
        f"{colors}"
        "\n[export]\n"
        "watermark = test watermark\n",
        encoding="utf-8")
    return str(config_file)


@pytest.fixture
def config(tmp_path):
    return _write_config(tmp_path)


@pytest.fixture
def answers(monkeypatch):
    """Feed canned replies to input()."""
    replies = []
    monkeypatch.setattr(
        "builtins.input", lambda prompt="": replies.pop(0))
    return replies


def _stored(tmp_path):
    with open(tmp_path / "data" / "db.json", encoding="utf-8") as db_file:
        return json.load(db_file)["notes"]


def _run(config, *args):
    main(["-c", config, *args])


def test_default_config_is_created(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "conf" / "config"

    notes = Notes(str(config_file), DEFAULT_CONFIG)

    assert config_file.exists()
    assert notes.data_path == os.path.join(str(tmp_path / "data"), "db.json")
    assert (tmp_path / "data" / "db.json").exists()


def test_new_and_list(tmp_path, config, capsys):
    _run(config, "new", "buy milk")
    _run(config, "create", "walk dog")
    out = capsys.readouterr().out
    assert "Added note: 1" in out
    assert "Added note: 2" in out

    _run(config, "list")
    out = capsys.readouterr().out
    assert "(1) buy milk" in out
    assert "(2) walk dog" in out
    assert _stored(tmp_path) == [
        {"id": 1, "content": "buy milk"},
        {"id": 2, "content": "walk dog"},
    ]


def test_list_empty(config, capsys):
    _run(config, "ls")
    assert "None" in capsys.readouterr().out


def test_new_blank_content_exits(tmp_path, config, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run(config, "new", "   ")
    assert excinfo.value.code == 1
    assert "ERROR: Note content cannot be empty." in capsys.readouterr().out
    assert _stored(tmp_path) == []


def test_new_prompts_until_content(tmp_path, config, answers, capsys):
    answers.extend(["", "  ", "typed note"])
    _run(config, "new")

    assert "Note content cannot be empty!" in capsys.readouterr().out
    assert _stored(tmp_path) == [{"id": 1, "content": "typed note"}]


def test_new_asks_for_mode_and_saves_it(tmp_path, answers):
    config = _write_config(tmp_path, extra_main="")
    answers.extend(["1", "y", "asked note"])
    _run(config, "new")

    assert _stored(tmp_path) == [{"id": 1, "content": "asked note"}]
    with open(config, encoding="utf-8") as config_file:
        assert "mode = cli" in config_file.read()


def test_view(config, capsys):
    _run(config, "new", "buy milk")
    capsys.readouterr()

    _run(config, "view", "1")
    out = capsys.readouterr().out
    assert '"id": 1' in out
    assert '"content": "buy milk"' in out


def test_view_missing(config, capsys):
    with pytest.raises(SystemExit):
        _run(config, "view", "4")
    assert "ERROR: Note 4 not found." in capsys.readouterr().out


@pytest.mark.parametrize("bad_id", ["abc", "0", "-2"])
def test_invalid_id(config, capsys, bad_id):
    with pytest.raises(SystemExit):
        _run(config, "view", bad_id)
    assert "is not a valid note ID" in capsys.readouterr().out


def test_delete_renumbers(tmp_path, config, capsys):
    for content in ["buy milk", "walk dog", "call mom"]:
        _run(config, "new", content)

    _run(config, "delete", "1", "--force")

    assert "Deleted note: 1" in capsys.readouterr().out
    assert _stored(tmp_path) == [
        {"id": 1, "content": "walk dog"},
        {"id": 2, "content": "call mom"},
    ]


def test_delete_cancelled(tmp_path, config, answers, capsys):
    _run(config, "new", "keep me")
    answers.append("no")

    _run(config, "rm", "1")

    assert "Cancelled." in capsys.readouterr().out
    assert len(_stored(tmp_path)) == 1


def test_delete_missing(config, capsys):
    with pytest.raises(SystemExit):
        _run(config, "delete", "1", "-f")
    assert "Note 1 not found" in capsys.readouterr().out


def test_update(tmp_path, config, capsys):
    _run(config, "new", "walk dog")
    _run(config, "update", "1", "walk the dog")

    assert "Updated note: 1" in capsys.readouterr().out
    assert _stored(tmp_path) == [{"id": 1, "content": "walk the dog"}]


def test_update_missing(config, capsys):
    with pytest.raises(SystemExit):
        _run(config, "edit", "3", "text")
    assert "Note 3 not found" in capsys.readouterr().out


def test_update_in_editor(tmp_path, monkeypatch):
    config = _write_config(tmp_path, extra_main="mode = editor\n")
    monkeypatch.setenv("EDITOR", "fake-editor")
    seen = []

    def fake_run(cmd, check=False, shell=False):
        path = cmd.split()[-1]
        with open(path, encoding="utf-8") as source:
            seen.append(source.read())
        with open(path, "w", encoding="utf-8") as out_file:
            out_file.write("  edited in editor\n")

    monkeypatch.setattr(jotnote.subprocess, "run", fake_run)
    _run(config, "new", "original")
    _run(config, "update", "1")

    assert seen == ["original"]
    assert _stored(tmp_path) == [{"id": 1, "content": "edited in editor"}]


def test_search(config, capsys):
    for content in ["walk dog", "buy milk", "Dog food"]:
        _run(config, "new", content)
    capsys.readouterr()

    _run(config, "search", "dog")
    out = capsys.readouterr().out
    assert "(1) walk dog" in out
    assert "buy milk" not in out
    assert "Dog food" not in out


def test_search_no_match(config, capsys):
    _run(config, "new", "walk dog")
    capsys.readouterr()
    _run(config, "search", "cat")
    assert "None" in capsys.readouterr().out


def test_export_default_paths(tmp_path, config, capsys):
    _run(config, "new", "buy milk")
    _run(config, "export", "json")
    _run(config, "export")

    out = capsys.readouterr().out
    assert "Exported 1 note(s) to JSON" in out
    with open(tmp_path / "exports" / "notes_export.json",
              encoding="utf-8") as json_file:
        assert json.load(json_file) == {
            "notes": [{"id": 1, "content": "buy milk"}]}
    assert (tmp_path / "exports" / "all_notes.pdf").exists()


def test_export_output_option(tmp_path, config):
    _run(config, "new", "buy milk")
    target = tmp_path / "elsewhere" / "notes.yaml"
    _run(config, "export", "yaml", "-o", str(target))
    assert target.exists()


def test_export_leaves_store_untouched(tmp_path, config):
    _run(config, "new", "a")
    _run(config, "new", "b")
    before = (tmp_path / "data" / "db.json").read_bytes()
    _run(config, "export", "pdf")
    assert (tmp_path / "data" / "db.json").read_bytes() == before


def test_theme(config, capsys):
    _run(config, "theme", "green")

    assert "You selected the green theme!" in capsys.readouterr().out
    with open(config, encoding="utf-8") as config_file:
        assert "theme = green" in config_file.read()


def test_theme_unknown(config, capsys):
    with pytest.raises(SystemExit):
        _run(config, "theme", "purple")
    assert "unknown theme color 'purple'" in capsys.readouterr().out


def test_theme_prompt(config, answers):
    answers.append("4")
    _run(config, "theme")
    with open(config, encoding="utf-8") as config_file:
        assert "theme = blue" in config_file.read()


def test_invalid_theme_in_config(tmp_path, capsys):
    config = _write_config(tmp_path, colors="theme = purple\n")
    notes = Notes(config, DEFAULT_CONFIG)

    assert notes.theme is None
    assert "unknown theme color 'purple'" in capsys.readouterr().out


def test_theme_styles_from_config(tmp_path):
    config = _write_config(tmp_path, colors="theme = blue\n")
    notes = Notes(config, DEFAULT_CONFIG)

    assert notes.style_theme == theme_style("blue")
    assert notes.style_title == theme_style("blue", bold=True)


def test_mode(config):
    _run(config, "mode", "editor")
    with open(config, encoding="utf-8") as config_file:
        assert "mode = editor" in config_file.read()


def test_corrupt_data_file(tmp_path, config, capsys):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "db.json").write_text("{oops", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        _run(config, "list")
    assert excinfo.value.code == 1
    assert "Repair or delete the file" in capsys.readouterr().out


def test_version(capsys):
    main(["version"])
    assert "jotnote" in capsys.readouterr().out


def test_no_command():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1


def _shell(config):
    notes = Notes(config, DEFAULT_CONFIG)
    notes.interactive = True
    return NotesShell(notes, watch=False)


def test_shell_commands(tmp_path, config, answers, capsys):
    shell = _shell(config)
    assert "notes(0)" in shell.prompt

    shell.onecmd("new buy milk")
    shell.onecmd("create walk dog")
    shell.postcmd(False, "")
    assert "notes(2)" in shell.prompt

    shell.onecmd("edit 2 walk the dog")
    answers.append("y")
    shell.onecmd("rm 1")
    assert _stored(tmp_path) == [{"id": 1, "content": "walk the dog"}]

    shell.onecmd("search dog")
    out = capsys.readouterr().out
    assert "(1) walk the dog" in out


def test_shell_pager_argument():
    assert NotesShell._pager_arg("dog |") == ("dog", True)
    assert NotesShell._pager_arg(" dog ") == ("dog", False)


def test_shell_errors_do_not_exit(config, capsys):
    shell = _shell(config)

    shell.onecmd("view 9")
    shell.onecmd("update 9 nothing")
    shell.onecmd("bogus")

    out = capsys.readouterr().out
    assert "ERROR: Note 9 not found." in out
    assert "No such command" in out


def test_shell_reports_storage_failures(tmp_path, config, capsys):
    shell = _shell(config)
    (tmp_path / "data" / "db.json").write_text("[]", encoding="utf-8")

    shell.onecmd("list")

    assert "Repair or delete the file" in capsys.readouterr().out


def test_shell_refresh_with_corrupt_data_file(tmp_path, config, capsys):
    shell = _shell(config)
    shell.onecmd("new buy milk")
    (tmp_path / "data" / "broken.json").write_text("{oops", encoding="utf-8")
    with open(config, encoding="utf-8") as config_file:
        text = config_file.read()
    with open(config, "w", encoding="utf-8") as config_file:
        config_file.write(text.replace("data_file = db.json",
                                       "data_file = broken.json"))

    shell.onecmd("refresh")

    assert "Repair or delete the file" in capsys.readouterr().out
    assert shell.notes.data_file == "db.json"
    shell.onecmd("list")
    assert "(1) buy milk" in capsys.readouterr().out


def test_shell_missing_config_does_not_exit(tmp_path, config, capsys):
    shell = _shell(config)
    os.remove(config)

    shell.onecmd("refresh")

    assert "ERROR: Config file not found." in capsys.readouterr().out


class _FakeObserver():
    def __init__(self):
        self.watched = []
        self.daemon = False

    def schedule(self, handler, path, recursive=False):
        self.watched.append(path)

    def unschedule_all(self):
        self.watched = []

    def start(self):
        pass

    def stop(self):
        pass


def test_shell_watches_new_data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(jotnote, "Observer", _FakeObserver)
    config = _write_config(tmp_path)
    notes = Notes(config, DEFAULT_CONFIG)
    notes.interactive = True
    shell = NotesShell(notes)
    assert shell.observer.watched == [str(tmp_path / "data")]

    with open(config, encoding="utf-8") as config_file:
        text = config_file.read()
    with open(config, "w", encoding="utf-8") as config_file:
        config_file.write(text.replace(str(tmp_path / "data"),
                                       str(tmp_path / "moved")))
    shell.onecmd("refresh")

    assert shell.observer.watched == [str(tmp_path / "moved")]
    assert shell.watched_dir == str(tmp_path / "moved")


def test_new_unencodable_content_keeps_notes(tmp_path, config, capsys):
    _run(config, "new", "buy milk")

    with pytest.raises(SystemExit) as excinfo:
        _run(config, "new", "bad \udcff byte")

    assert excinfo.value.code == 1
    assert "can't be saved as UTF-8" in capsys.readouterr().out
    assert _stored(tmp_path) == [{"id": 1, "content": "buy milk"}]


def test_shell_exit(config):
    shell = _shell(config)
    with pytest.raises(SystemExit) as excinfo:
        shell.onecmd("quit")
    assert excinfo.value.code == 0


class _FakeEvent():
    def __init__(self, event_type):
        self.event_type = event_type


class _FakeShell():
    def __init__(self):
        self.calls = []

    def do_refresh(self, args):
        self.calls.append(args)


def test_fs_handler_refreshes_shell():
    shell = _FakeShell()
    handler = FSHandler(shell)

    handler.on_any_event(_FakeEvent("modified"))
    handler.on_any_event(_FakeEvent("opened"))

    assert shell.calls == ["silent"]
