"""Unit tests for the backend/frontend path classifier."""

from utils.change_models import ChangedFile
from utils.classifier import (
    BACKEND,
    FRONTEND,
    build_rules,
    categories_for,
    classify,
    detect_backend_endpoints,
    detect_frontend_changes,
)


def _files(*paths):
    return [ChangedFile(path=p) for p in paths]


class TestClassifier:
    """Test cases for path classification."""

    def test_three_file_scenario(self):
        """Endpoint file, component and plain type file land in the expected buckets."""
        files = _files("src/api/endpoints.ts", "src/components/UserList.tsx", "src/types/user.ts")

        result = classify(files)

        assert result.backend == ["src/api/endpoints.ts"]
        assert result.frontend == ["src/components/UserList.tsx"]

    def test_path_can_match_both_buckets(self):
        """A .tsx file under /api/ is both backend and frontend."""
        files = _files("src/api/Widget.tsx")

        assert detect_backend_endpoints(files) == ["src/api/Widget.tsx"]
        assert detect_frontend_changes(files) == ["src/api/Widget.tsx"]

    def test_backend_directory_markers(self):
        files = _files(
            "app/routes/users.py",
            "app/controllers/auth.rb",
            "svc/endpoints/health.go",
            "README.md",
        )

        assert detect_backend_endpoints(files) == [
            "app/routes/users.py",
            "app/controllers/auth.rb",
            "svc/endpoints/health.go",
        ]

    def test_server_substring_requires_js_or_ts(self):
        files = _files("config/server.ts", "server.js", "server.py", "src/serverless.go")

        assert detect_backend_endpoints(files) == ["config/server.ts", "server.js"]

    def test_matching_is_case_sensitive(self):
        files = _files("src/API/users.ts", "src/Components/Button.js", "Server.ts")

        assert detect_backend_endpoints(files) == []
        assert detect_frontend_changes(files) == []

    def test_frontend_markers_and_extensions(self):
        files = _files(
            "web/pages/index.js",
            "web/hooks/useUser.js",
            "lib/utils/format.py",
            "App.vue",
            "Card.svelte",
            "Button.jsx",
            "styles.css",
        )

        assert detect_frontend_changes(files) == [
            "web/pages/index.js",
            "web/hooks/useUser.js",
            "lib/utils/format.py",
            "App.vue",
            "Card.svelte",
            "Button.jsx",
        ]

    def test_leading_marker_needs_a_slash_before_it(self):
        """Markers are literal substrings, so a repo-root 'api/' dir does not match '/api/'."""
        assert detect_backend_endpoints(_files("api/users.ts")) == []

    def test_empty_input(self):
        result = classify([])

        assert result.backend == []
        assert result.frontend == []

    def test_deterministic_and_order_preserving(self):
        files = _files("z/api/b.ts", "a/api/a.ts", "m/components/C.tsx", "b/pages/p.jsx")

        first = classify(files)
        second = classify(files)

        assert first == second
        assert first.backend == ["z/api/b.ts", "a/api/a.ts"]
        assert first.frontend == ["m/components/C.tsx", "b/pages/p.jsx"]

    def test_categories_for_reports_each_category_once(self):
        assert categories_for("src/api/server.ts") == [BACKEND]
        assert categories_for("src/api/components/X.tsx") == [BACKEND, FRONTEND]
        assert categories_for("docs/guide.md") == []

    def test_server_extensions_are_configurable(self):
        rules = build_rules(server_extensions=(".go",))
        files = _files("cmd/server.go", "src/server.ts")

        assert detect_backend_endpoints(files, rules) == ["cmd/server.go"]
