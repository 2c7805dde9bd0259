"""
Test utilities package for translation updater tests.

## Available Modules

### test_helpers.py
- `RecordingShell`: Shell double that records git invocations and replays canned output
- `RecordingClock`: Clock double that records requested delays without sleeping
- `FakeCrowdinAPI`: In-memory Crowdin API served through httpx.MockTransport
- `top_members_document()`: Build a top-members report document
- `build_zip()`: Create zip archive bytes from a mapping of entry names to content
- `create_test_config()`: Build an UpdaterConfig rooted in a temporary directory
"""
