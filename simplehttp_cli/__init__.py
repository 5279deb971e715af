"""
simplehttp CLI

Command-line front end for the request facade.

Usage:
    python -m simplehttp_cli get https://example.com/ -H "Accept: text/html"
    python -m simplehttp_cli post https://example.com/api --data '{"a": 1}'
    python -m simplehttp_cli config --show
"""

__version__ = "0.1.0"

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_HTTP_ERROR = 2
