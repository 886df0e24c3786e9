import pytest

from pmon import scheduler
from pmon.scheduler import Phase


def run_transitions(config, count):
    state = scheduler.SessionState()
    phases = [state.phase]
    for _ in range(count):
        phases.append(scheduler.advance(state, config))
    return phases, state


def test_sequence_has_long_break_after_every_fourth_work_phase():
    phases, _ = run_transitions(scheduler.Config(), 9)
    assert phases == [
        Phase.WORK, Phase.SHORT_BREAK,
        Phase.WORK, Phase.SHORT_BREAK,
        Phase.WORK, Phase.SHORT_BREAK,
        Phase.WORK, Phase.LONG_BREAK,
        Phase.WORK, Phase.SHORT_BREAK,
    ]


@pytest.mark.parametrize("cycles", [1, 2, 3, 5])
def test_work_phases_between_long_breaks_match_cycles(cycles):
    phases, _ = run_transitions(scheduler.Config(cycles=cycles), 6 * cycles)
    long_breaks = [i for i, phase in enumerate(phases) if phase is Phase.LONG_BREAK]
    assert len(long_breaks) >= 2
    for start, end in zip(long_breaks, long_breaks[1:]):
        assert phases[start + 1:end].count(Phase.WORK) == cycles


def test_cycle_count_increments_on_work_completion_only():
    config = scheduler.Config()
    state = scheduler.SessionState()

    assert scheduler.next_phase(state, config) is Phase.SHORT_BREAK
    assert state.cycle_count == 1

    state.phase = Phase.SHORT_BREAK
    assert scheduler.next_phase(state, config) is Phase.WORK
    assert state.cycle_count == 1


def test_cycle_count_follows_work_completions_modulo_cycles():
    config = scheduler.Config(cycles=4)
    state = scheduler.SessionState()
    completions = 0
    for _ in range(20):
        was_work = state.phase is Phase.WORK
        scheduler.advance(state, config)
        if was_work:
            completions += 1
            assert state.cycle_count == completions % 4
        assert 0 <= state.cycle_count < config.cycles


def test_fourth_work_completion_enters_long_break_and_resets_count():
    config = scheduler.Config.from_minutes(cycles=4, work_minutes=25, short_break_minutes=5, long_break_minutes=30)
    state = scheduler.SessionState()
    work_done = short_breaks_done = 0
    while work_done < 3 or short_breaks_done < 3:
        if state.phase is Phase.WORK:
            work_done += 1
        else:
            short_breaks_done += 1
        scheduler.advance(state, config)
    assert state.phase is Phase.WORK
    assert state.cycle_count == 3

    assert scheduler.advance(state, config) is Phase.LONG_BREAK
    assert state.cycle_count == 0
    assert scheduler.advance(state, config) is Phase.WORK
    assert state.cycle_count == 0


def test_leaving_long_break_resets_count():
    state = scheduler.SessionState(phase=Phase.LONG_BREAK, cycle_count=2)
    assert scheduler.next_phase(state, scheduler.Config()) is Phase.WORK
    assert state.cycle_count == 0


def test_advance_resets_elapsed():
    state = scheduler.SessionState(elapsed_seconds=42)
    scheduler.advance(state, scheduler.Config())
    assert state.elapsed_seconds == 0


def test_requires_positive_values():
    with pytest.raises(ValueError):
        scheduler.Config(cycles=0)
    with pytest.raises(ValueError):
        scheduler.Config(work_seconds=0)
    with pytest.raises(ValueError):
        scheduler.Config.from_minutes(long_break_minutes=-1)


def test_defaults_match_pomodoro_lengths():
    config = scheduler.Config()
    assert config.cycles == 4
    assert (config.work_seconds, config.short_break_seconds, config.long_break_seconds) == (1500, 300, 1800)
    assert config.output_path is None
    assert config.minute_length == 60


def test_from_minutes_scales_by_second_length():
    config = scheduler.Config.from_minutes(work_minutes=2, short_break_minutes=1, long_break_minutes=3, second_length=1)
    assert scheduler.phase_duration(config, Phase.WORK) == 2
    assert scheduler.phase_duration(config, Phase.SHORT_BREAK) == 1
    assert scheduler.phase_duration(config, Phase.LONG_BREAK) == 3
    assert config.minute_length == 1


def test_preview_does_not_touch_state():
    config = scheduler.Config(cycles=2)
    state = scheduler.SessionState(phase=Phase.SHORT_BREAK, cycle_count=1)
    phases = scheduler.preview(config, 4, state)
    assert phases == [Phase.SHORT_BREAK, Phase.WORK, Phase.LONG_BREAK, Phase.WORK]
    assert state.phase is Phase.SHORT_BREAK
    assert state.cycle_count == 1


def test_break_phases_are_flagged():
    assert not Phase.WORK.is_break
    assert Phase.SHORT_BREAK.is_break
    assert Phase.LONG_BREAK.is_break
