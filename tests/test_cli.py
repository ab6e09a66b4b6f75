"""Tests for cli.py - commands end to end against a temporary store."""

import pytest

from todos.cli import MENU, build_parser, main
from todos.storage import Store


def run(store, *argv):
    main(["-d", store.base_dir, *argv])


def read_bytes(store):
    with open(store.path, "rb") as f:
        return f.read()


@pytest.fixture
def seeded(store, sample_tasks):
    store.save(sample_tasks)
    return store


class TestAdd:
    def test_direct(self, store, capsys):
        run(store, "add", "buy milk")
        tasks = store.load()
        assert len(tasks) == 1
        assert tasks[0].short_desc == "buy milk"
        assert tasks[0].long_desc is None
        assert tasks[0].completed is False
        assert "Added: buy milk" in capsys.readouterr().out

    def test_interactive(self, store, feed_input):
        feed_input("write tests", "cover the cli")
        run(store, "add")
        (task,) = store.load()
        assert (task.short_desc, task.long_desc) == ("write tests", "cover the cli")

    def test_keeps_existing(self, seeded, sample_tasks):
        run(seeded, "add", "delta")
        assert {t.id for t in sample_tasks} < {t.id for t in seeded.load()}

    def test_direct_text_is_stripped_at_the_edges(self, store):
        run(store, "add", "  call  the bank  ")
        assert store.load()[0].short_desc == "call  the bank"

    def test_interactive_text_is_stripped_at_the_edges(self, store, feed_input):
        feed_input("  pay rent ", "  by friday ")
        run(store, "add")
        (task,) = store.load()
        assert (task.short_desc, task.long_desc) == ("pay rent", "by friday")

    def test_empty_allowed_by_default(self, store):
        run(store, "add", "")
        assert store.load()[0].short_desc == ""

    def test_strict_env_rejects_empty(self, store, monkeypatch):
        monkeypatch.setenv("TODOS_STRICT", "1")
        with pytest.raises(SystemExit) as exc:
            run(store, "add", "   ")
        assert "must not be empty" in str(exc.value.code)
        assert not store.exists()

    def test_dir_from_env(self, store, monkeypatch):
        monkeypatch.setenv("TODOS_DIR", store.base_dir)
        main(["add", "from env"])
        assert store.load()[0].short_desc == "from env"


class TestEdit:
    def test_quick_edit_rederives_completion(self, seeded, feed_input):
        feed_input("2")
        run(seeded, "edit")
        state = {t.short_desc: t.completed for t in seeded.load()}
        assert state == {"alpha": False, "bravo": True, "charlie": False}

    def test_quick_edit_blank_keeps_current(self, seeded, feed_input):
        feed_input("")
        run(seeded, "edit")
        state = {t.short_desc: t.completed for t in seeded.load()}
        assert state == {"alpha": True, "bravo": False, "charlie": True}

    def test_full_edit(self, seeded, sample_tasks, feed_input):
        alpha = sample_tasks[0]
        feed_input("1", "alpha v2", "-", "n")
        run(seeded, "edit", "--full")

        edited = {t.id: t for t in seeded.load()}[alpha.id]
        assert edited.short_desc == "alpha v2"
        assert edited.long_desc is None
        assert edited.completed is False
        assert edited.created_at == alpha.created_at
        assert len(seeded.load()) == 3

    def test_full_edit_defaults_to_current_values(self, seeded, sample_tasks, feed_input):
        feed_input("1", "", "", "")
        run(seeded, "edit", "--full")
        edited = {t.id: t for t in seeded.load()}[sample_tasks[0].id]
        assert (edited.short_desc, edited.long_desc, edited.completed) == (
            "alpha",
            "first one",
            True,
        )

    def test_empty_collection(self, store, capsys):
        run(store, "edit", "--full")
        assert "Nothing to edit" in capsys.readouterr().out
        assert not store.exists()


class TestRemove:
    def test_remove_all_declined(self, seeded, feed_input):
        before = read_bytes(seeded)
        feed_input("")
        run(seeded, "remove", "--all")
        assert read_bytes(seeded) == before
        assert len(seeded.load()) == 3

    def test_remove_all_confirmed(self, seeded, feed_input):
        feed_input("y")
        run(seeded, "rm", "--all")
        assert seeded.load() == []

    def test_remove_selected(self, seeded, feed_input):
        feed_input("1 3", "y")
        run(seeded, "remove")
        assert [t.short_desc for t in seeded.load()] == ["bravo"]

    def test_empty_selection_is_noop(self, seeded, feed_input):
        before = read_bytes(seeded)
        queue = feed_input("")
        run(seeded, "remove")
        assert queue == []
        assert read_bytes(seeded) == before

    def test_decline_reprompts_selection(self, seeded, feed_input):
        queue = feed_input("1", "n", "2 3", "y")
        run(seeded, "remove")
        assert queue == []
        assert [t.short_desc for t in seeded.load()] == ["alpha"]

    def test_decline_then_select_nothing(self, seeded, feed_input):
        before = read_bytes(seeded)
        feed_input("1", "n", "none")
        run(seeded, "remove")
        assert read_bytes(seeded) == before

    def test_cancel_leaves_file(self, seeded, feed_input):
        before = read_bytes(seeded)
        feed_input("1")
        with pytest.raises(SystemExit) as exc:
            run(seeded, "remove")
        assert exc.value.code == 130
        assert read_bytes(seeded) == before


class TestList:
    def test_empty(self, store, capsys):
        run(store, "list")
        assert capsys.readouterr().out == "(no todos)\n"
        assert not store.exists()

    def test_lines(self, seeded, capsys):
        run(seeded, "ls")
        assert capsys.readouterr().out.splitlines() == [
            "[x] alpha",
            "[ ] bravo",
            "[x] charlie",
        ]

    def test_created(self, seeded, capsys):
        run(seeded, "list", "--created")
        assert "(2024-01-02 09:00)" in capsys.readouterr().out

    def test_malformed_file_is_reported(self, store):
        with open(store.path, "w", encoding="utf-8") as f:
            f.write("garbage")
        with pytest.raises(SystemExit) as exc:
            run(store, "list")
        assert str(exc.value.code).startswith("todos: ")


class TestMenu:
    def test_menu_labels_map_to_subcommands(self):
        parser = build_parser()
        for _, cmd in MENU:
            assert parser.parse_args([cmd]).func is not None

    def test_no_subcommand_shows_menu(self, store, feed_input, capsys):
        feed_input("4")
        run(store)
        out = capsys.readouterr().out
        assert "Add a new todo" in out
        assert out.rstrip().endswith("(no todos)")

    def test_menu_add(self, store, feed_input):
        feed_input("1", "from menu", "-")
        run(store)
        assert store.load()[0].short_desc == "from menu"
