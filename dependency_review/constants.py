"""Constants for dependency-review."""

# Process exit codes
EXIT_SUCCESS = 0  # No issues found (or warn-only mode)
EXIT_ISSUES = 1  # Policy violations found
EXIT_ERROR = 2  # Invalid configuration
EXIT_NETWORK_ERROR = 3  # Remote retrieval or PR comment failed

# License value some SBOM sources use when no license was asserted
NO_ASSERTION = "NOASSERTION"

# Marker used to find the tool's own comment on a pull request
COMMENT_MARKER = "<!-- dependency-review-cli -->"

GITHUB_API_URL = "https://api.github.com"
DEPS_DEV_API_URL = "https://api.deps.dev"
SCORECARD_API_URL = "https://api.securityscorecards.dev"
