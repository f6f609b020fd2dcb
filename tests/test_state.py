from __future__ import annotations

from flapster.core.state import GameStateMachine, Phase

from conftest import BrokenStore, RecordingStore


def make_machine(store=None, debounce: float = 80.0) -> GameStateMachine:
    return GameStateMachine(store or RecordingStore(), "flapster_best", restart_debounce_ms=debounce)


def play(machine: GameStateMachine, now: float, points: int = 0) -> None:
    machine.begin_tick(now)
    assert machine.start()
    for _ in range(points):
        machine.add_point()


def test_initial_phase_and_best_from_store() -> None:
    machine = make_machine(RecordingStore({"flapster_best": "17"}))
    assert machine.phase is Phase.START
    assert machine.state.best_score == 17


def test_malformed_best_defaults_to_zero() -> None:
    machine = make_machine(RecordingStore({"flapster_best": "lots"}))
    assert machine.state.best_score == 0


def test_unreadable_store_defaults_to_zero() -> None:
    assert make_machine(BrokenStore()).state.best_score == 0


def test_score_only_counts_while_playing() -> None:
    machine = make_machine()
    machine.begin_tick(0.0)
    assert not machine.add_point()
    assert machine.state.score == 0

    machine.start()
    assert machine.add_point()
    assert machine.state.score == 1


def test_only_one_transition_per_tick() -> None:
    machine = make_machine()
    machine.begin_tick(0.0)
    assert machine.start()
    assert not machine.finish_run(0.0)
    assert machine.phase is Phase.PLAYING

    machine.begin_tick(16.0)
    assert machine.finish_run(16.0)
    assert machine.phase is Phase.DEAD


def test_invalid_transitions_are_refused() -> None:
    machine = make_machine()
    machine.begin_tick(0.0)
    assert not machine.transition(Phase.DEAD)
    assert not machine.restart(1000.0)
    assert machine.phase is Phase.START


def test_best_persisted_only_when_beaten() -> None:
    store = RecordingStore({"flapster_best": "3"})
    machine = make_machine(store)

    play(machine, 0.0, points=2)
    machine.begin_tick(10.0)
    machine.finish_run(10.0)
    assert machine.state.best_score == 3
    assert store.writes == []

    machine.begin_tick(200.0)
    assert machine.restart(200.0)
    machine.add_point()
    machine.add_point()
    machine.add_point()
    machine.begin_tick(300.0)
    machine.finish_run(300.0)
    # Equal to the best is not an improvement
    assert store.writes == []
    assert machine.state.is_new_best

    machine.begin_tick(500.0)
    machine.restart(500.0)
    for _ in range(5):
        machine.add_point()
    machine.begin_tick(600.0)
    machine.finish_run(600.0)
    assert machine.state.best_score == 5
    assert store.writes == [("flapster_best", "5")]


def test_failed_persist_does_not_interrupt_run() -> None:
    machine = make_machine(BrokenStore())
    play(machine, 0.0, points=4)
    machine.begin_tick(10.0)
    assert machine.finish_run(10.0)
    assert machine.phase is Phase.DEAD
    assert machine.state.best_score == 4


def test_restart_waits_for_debounce() -> None:
    machine = make_machine(debounce=80.0)
    play(machine, 0.0, points=3)
    machine.begin_tick(100.0)
    machine.finish_run(100.0)

    machine.begin_tick(179.0)
    assert not machine.can_restart(179.0)
    assert not machine.restart(179.0)
    assert machine.phase is Phase.DEAD

    machine.begin_tick(180.0)
    assert machine.restart(180.0)
    assert machine.phase is Phase.PLAYING
    assert machine.state.score == 0


def test_listeners_see_transitions_and_errors_are_contained() -> None:
    machine = make_machine()
    seen = []

    def broken(old, new, state):
        raise RuntimeError("boom")

    machine.add_listener(broken)
    machine.add_listener(lambda old, new, state: seen.append((old, new)))
    machine.begin_tick(0.0)
    machine.start()
    assert seen == [(Phase.START, Phase.PLAYING)]

    machine.remove_listener(broken)
    machine.begin_tick(1.0)
    machine.finish_run(1.0)
    assert seen[-1] == (Phase.PLAYING, Phase.DEAD)
