"""Tests for action bookkeeping."""

import pytest

from gridprops.exceptions import ActionNotFoundError
from gridprops.schedule import ActionX, Actions


class TestActionX:
    """Test when an action is ready to run."""

    def test_first_run(self):
        action = ActionX('A', start_time=100.0)
        assert not action.ready(50.0)
        assert action.ready(100.0)

    def test_max_run(self):
        action = ActionX('A', max_run=1)
        action.mark_run(10.0)
        assert not action.ready(1000.0)

    def test_min_wait(self):
        action = ActionX('A', max_run=3, min_wait=60.0)
        action.mark_run(0.0)
        assert not action.ready(60.0)
        assert action.ready(61.0)

    def test_no_wait(self):
        action = ActionX('A', max_run=3)
        action.mark_run(0.0)
        assert action.ready(0.0)


class TestActions:
    """Test the ordered action container."""

    def test_add_and_get(self):
        actions = Actions()
        assert actions.empty()

        actions.add(ActionX('A'))
        actions.add(ActionX('B'))

        assert len(actions) == 2
        assert actions.get('B').name == 'B'
        assert actions[0].name == 'A'
        assert [a.name for a in actions] == ['A', 'B']

    def test_add_replaces_by_name(self):
        actions = Actions()
        actions.add(ActionX('A', max_run=1))
        actions.add(ActionX('B'))
        actions.add(ActionX('A', max_run=5))

        assert len(actions) == 2
        assert actions[0].max_run == 5

    def test_missing_action(self):
        with pytest.raises(ActionNotFoundError):
            Actions().get('NOPE')

    def test_pending(self):
        actions = Actions()
        actions.add(ActionX('EARLY', start_time=0.0))
        actions.add(ActionX('LATE', start_time=500.0))

        assert actions.ready(10.0)
        assert [a.name for a in actions.pending(10.0)] == ['EARLY']
        assert [a.name for a in actions.pending(600.0)] == ['EARLY', 'LATE']
        assert not Actions().ready(10.0)
