import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

# Ensure src/ is importable when running tests without installing the package.
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

_SETTINGS_ENV = (
    "MODEL_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "AZURE_API_KEY",
    "AZURE_OPENAI_RESOURCE",
    "AZURE_OPENAI_DEPLOYMENT",
    "AZURE_API_VERSION",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "GOOGLE_API_KEY",
    "GOOGLE_MODEL",
    "MAX_DIFF_CHARS",
    "IGNORE_PATTERNS",
    "MODEL_TEMPERATURE",
    "JIRA_BRANCH_REGEX",
    "PR_AGENT_LOG_LEVEL",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "OPENAI_API_VERSION",
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the developer's or runner's environment out of settings resolution."""

    for key in _SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    yield


SAMPLE_DIFF = """\
diff --git a/src/app.py b/src/app.py
index 1111111..2222222 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@
 import os
+import sys
 
 def main():
@@ -10,2 +11,3 @@ def main():
     run()
+    sys.exit(0)
diff --git a/poetry.lock b/poetry.lock
index 3333333..4444444 100644
--- a/poetry.lock
+++ b/poetry.lock
@@ -1 +1 @@
-old
+new
diff --git a/docs/guide.md b/docs/guide.md
new file mode 100644
--- /dev/null
+++ b/docs/guide.md
@@ -0,0 +1 @@
+# Guide
"""


@pytest.fixture
def sample_diff() -> str:
    """Three-file unified diff: source, lock file, and docs."""

    return SAMPLE_DIFF


@pytest.fixture
def event_file(tmp_path: pathlib.Path):
    """Factory writing a GitHub event payload to disk and returning its path."""

    import json

    def _write(payload: dict) -> pathlib.Path:
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
