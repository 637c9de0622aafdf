from unittest.mock import Mock

from whenmock import when
from whenmock.call_site import UNKNOWN, capture_call_site, no_call_site


def test_capture_call_site_points_at_the_caller():
    location = capture_call_site()

    assert "test_call_site.py:" in location
    assert location.endswith("in test_capture_call_site_points_at_the_caller")


def test_capture_call_site_keeps_more_context_when_asked():
    lines = capture_call_site(context=2).splitlines()

    assert len(lines) == 2
    assert "test_call_site.py:" in lines[0]


def test_no_call_site_is_unknown():
    assert no_call_site() == UNKNOWN
    assert no_call_site(context=5) == UNKNOWN


def test_rules_remember_where_they_were_declared():
    fn = Mock()
    when(fn).called_with(1).returns("a")

    [rule] = when(fn).rules

    assert "test_call_site.py:" in rule.source_location
    assert "in test_rules_remember_where_they_were_declared" in rule.source_location
