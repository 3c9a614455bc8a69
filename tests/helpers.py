import re
import json

SSE_PATTERN = re.compile(r'event: (\w+)\ndata: (.*?)\n\n', re.DOTALL)


def parse_sse_events(body):
    """Parse an SSE body into a list of (event_type, data) tuples."""
    return [(event_type, json.loads(data)) for event_type, data in SSE_PATTERN.findall(body)]


def assert_sse_event(body, event_type, **expected_data):
    """
    Assert that an SSE event with the given type and expected data exists in the body.
    Checks all occurrences of the event type.
    """
    for found_type, data in parse_sse_events(body):
        if found_type != event_type:
            continue
        if all(key in data and data[key] == value for key, value in expected_data.items()):
            return data

    assert False, f"No '{event_type}' event found with all expected data: {expected_data} in SSE body:\n{body}"


def collect_tokens(body):
    """Concatenate the content of every token event."""
    return "".join(data["content"] for event_type, data in parse_sse_events(body) if event_type == "token")


def events_of_type(body, event_type):
    return [data for found_type, data in parse_sse_events(body) if found_type == event_type]
