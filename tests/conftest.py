"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Node

from nextscope.config import Settings
from nextscope.parsing.languages import get_parser
from nextscope.plugins import PluginManager, create_default_manager


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative path: content}`` under ``root`` and return ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def parse_source(source: str, filename: str = "sample.tsx") -> Node:
    """Parse a snippet with the grammar for ``filename`` and return the root node."""
    parser = get_parser(filename)
    assert parser is not None
    return parser.parse(source.encode("utf-8")).root_node


SAMPLE_FILES: dict[str, str] = {
    "package.json": json.dumps({
        "name": "sample-app",
        "dependencies": {"next": "14.0.0", "react": "18.2.0"},
    }),
    "pages/index.tsx": '''
import { useState } from "react";
import { useTranslation } from "react-i18next";
import Header from "../components/Header";

export default function Home() {
  const { t } = useTranslation();
  const [count, setCount] = useState(0);
  return (
    <div className="container">
      <Header title="Welcome back" />
      <h1>{t("home.title")}</h1>
      <p>Click the button to continue</p>
      <img src="/logo.png" alt="Company logo" />
    </div>
  );
}
''',
    "pages/blog/[slug].tsx": '''
export async function getStaticProps() {
  return { props: {} };
}

export async function getStaticPaths() {
  return { paths: [], fallback: false };
}

export default function BlogPost() {
  return <article>Blog post body</article>;
}
''',
    "pages/dashboard.tsx": '''
export async function getServerSideProps() {
  return { props: {} };
}

export default function Dashboard() {
  return <main>Dashboard</main>;
}
''',
    "pages/api/hello.ts": '''
export default function handler(req, res) {
  res.status(200).json({ message: "Hello from the API" });
}
''',
    "components/Header.tsx": '''
import React from "react";

interface HeaderProps {
  title: string;
}

export default function Header({ title }: HeaderProps) {
  const [open, setOpen] = React.useState(false);
  return (
    <header aria-label="Site header">
      <h2>{title}</h2>
    </header>
  );
}
''',
    "components/Counter.jsx": '''
import React, { Component } from "react";

export class Counter extends Component {
  state = { count: 0 };

  render() {
    return <button onClick={() => alert("Counter clicked!")}>Count</button>;
  }
}
''',
    "components/Conditional.tsx": '''
import { useState, useEffect } from "react";

export function Conditional({ enabled }) {
  if (enabled) {
    const [value] = useState(1);
  }
  const handler = () => {
    useEffect(() => {}, []);
  };
  return <span>{enabled ? "On" : "Off"}</span>;
}
''',
    "hooks/useAuth.ts": '''
import { useState, useEffect } from "react";

export function useAuth(initialUser) {
  const [user, setUser] = useState(initialUser);
  useEffect(() => {
    const errorMessage = "Session expired, please sign in again";
    console.log("auth debug output");
  }, []);
  return user;
}
''',
    "components/Header.test.tsx": '''
test("renders", () => { expect(1).toBe(1); });
''',
    "node_modules/lib/index.js": "export const ignored = 1;\n",
    "locales/en/common.json": json.dumps({"home": {"title": "Home", "subtitle": "Start here"}}),
    "locales/fr/common.json": json.dumps({"home": {"title": "Accueil"}}),
}


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory writing ``{relative path: content}`` into a fresh project dir."""
    counter = iter(range(1000))

    def _make(files: dict[str, str]) -> Path:
        return write_files(tmp_path / f"project{next(counter)}", files)

    return _make


@pytest.fixture
def parse() -> Callable[..., Node]:
    """Parse a source snippet; the optional filename picks the grammar."""
    return parse_source


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A small Next.js project with pages, components, hooks and locales."""
    return write_files(tmp_path / "app-root", SAMPLE_FILES)


@pytest.fixture
def manager() -> PluginManager:
    """Default manager with every built-in plugin, independent of the environment."""
    return create_default_manager(Settings(project_path=Path.cwd()))
