from roomplan.undo import UndoManager

from conftest import make_item

S0 = ()
S1 = (make_item("a"),)
S2 = (make_item("a"), make_item("b", x=2.0))
S3 = (make_item("c", y=3.0),)


def test_seed_is_only_snapshot():
    history = UndoManager(S1)
    assert history.current() == S1
    assert len(history) == 1
    assert not history.can_undo()
    assert not history.can_redo()


def test_undo_then_redo_walks_cursor():
    history = UndoManager(S0)
    history.commit(S1)
    history.commit(S2)
    assert history.undo() == S1
    assert history.undo() == S0
    assert history.redo() == S1
    assert history.cursor == 1
    assert len(history) == 3


def test_commit_after_undo_drops_redo_branch():
    history = UndoManager(S0)
    history.commit(S1)
    history.commit(S2)
    history.undo()
    history.undo()
    history.commit(S3)
    assert history.snapshots == (S0, S3)
    assert history.cursor == 1
    assert not history.can_redo()


def test_bounds_are_no_ops():
    history = UndoManager(S0)
    assert history.undo() is None
    assert history.redo() is None
    assert history.cursor == 0
    history.commit(S1)
    assert history.redo() is None
    assert history.current() == S1


def test_on_change_fires_for_every_move():
    calls = []
    history = UndoManager(S0, on_change=lambda: calls.append(1))
    history.commit(S1)
    history.undo()
    history.undo()          # at the bottom, nothing happens
    history.redo()
    assert len(calls) == 3


def test_reset_reseeds():
    history = UndoManager(S0)
    history.commit(S1)
    history.reset(S2)
    assert history.snapshots == (S2,)
    assert history.cursor == 0
