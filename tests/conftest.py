"""Shared fixtures: a small project with anchors, links and external references."""

import pytest
import yaml

CLIENT_TS = """\
/**
 * # !api/Client
 * Talks to the server. Retries are described in @retry.
 */
export class Client {
    // ## !connect
    // Opens the socket, see @mdn/WebSocket.
    connect() {}
}
"""

RETRY_TS = """\
// !retry
// Backoff policy used by @connect.
export const retry = 3;
"""

MAIN_TS = """\
// # Entry point
// Uses @connect and @missing.
import { Client } from "./lib/client";

new Client().connect();
"""

README = """\
---
title: Demo
---
# Demo project

Start with @connect.
"""


def write_project(root, **config_overrides):
    (root / "src" / "lib").mkdir(parents=True)
    (root / "src" / "lib" / "client.ts").write_text(CLIENT_TS)
    (root / "src" / "lib" / "retry.ts").write_text(RETRY_TS)
    (root / "src" / "main.ts").write_text(MAIN_TS)
    (root / "README.md").write_text(README)

    config = {
        "projectName": "demo",
        "files": ["src/**/*.ts"],
        "outputDir": "docs",
        "readme": "README.md",
        "generators": ["markdown", "html"],
        "externalReferences": [
            {"anchor": "mdn", "path": "https://developer.mozilla.org/en-US/docs/Web/API/::"},
        ],
    }
    config.update(config_overrides)
    (root / "duly-noted.yml").write_text(yaml.dump(config))
    return root


@pytest.fixture
def sample_project(tmp_path):
    """Project with nested sources, one unresolved link and a README."""
    return write_project(tmp_path / "demo")


@pytest.fixture
def make_project(tmp_path):
    """Factory for sample projects with config overrides."""
    def _make(name, **config_overrides):
        return write_project(tmp_path / name, **config_overrides)
    return _make
