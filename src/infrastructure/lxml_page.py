"""lxml-backed implementation of the portfolio page rendering target."""
import json
import logging
import re
from html import escape
from pathlib import Path
from typing import Any, Dict, List, Optional
import lxml.html
from lxml import etree
from src.domain.models import ActivityItem, Repository
from src.domain.page_interface import IPortfolioPage


logger = logging.getLogger(__name__)

_RULE_PATTERN = re.compile(r"([^{}]+)\{([^{}]*)\}")
_DECLARATION_PATTERN = re.compile(r"(--[\w-]+)\s*:\s*([^;]+)")

INDICATOR_CLASSES = {
    "stats": "github-stats",
    "activity": "activity-feed",
}
STALE_CLASS = "data-stale"


def _has_class(name: str) -> str:
    """XPath predicate matching elements whose class list contains name."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def _parse_style(style: Optional[str]) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for part in (style or "").split(";"):
        if ":" in part:
            name, value = part.split(":", 1)
            declarations[name.strip()] = value.strip()
    return declarations


def _format_style(declarations: Dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


def _set_style(element, name: str, value: str) -> None:
    declarations = _parse_style(element.get("style"))
    declarations[name] = value
    element.set("style", _format_style(declarations))


def _set_inner_html(element, markup: str) -> None:
    for child in list(element):
        element.remove(child)
    element.text = None
    if not markup:
        return
    for fragment in lxml.html.fragments_fromstring(markup):
        if isinstance(fragment, str):
            if len(element):
                last = element[-1]
                last.tail = (last.tail or "") + fragment
            else:
                element.text = (element.text or "") + fragment
        else:
            element.append(fragment)


def _set_text(element, text: str) -> None:
    for child in list(element):
        element.remove(child)
    element.text = text


class LxmlPortfolioPage(IPortfolioPage):
    """Portfolio document parsed with lxml.

    CSS custom properties are resolved from the page's ``<style>`` blocks:
    declarations in a ``.dark-theme`` rule win while the body carries that
    class, then inline declarations on the root element, then ``:root``.
    """

    def __init__(self, root, source_doctype: Optional[str] = None):
        self._root = root
        self._source_doctype = source_doctype

    @classmethod
    def from_string(cls, markup: str) -> 'LxmlPortfolioPage':
        root = lxml.html.document_fromstring(markup)
        # lxml reports a default doctype even when the markup has none
        declared = markup.lstrip().lower().startswith("<!doctype")
        return cls(root, root.getroottree().docinfo.doctype if declared else None)

    @classmethod
    def from_file(cls, path: str) -> 'LxmlPortfolioPage':
        return cls.from_string(Path(path).read_text(encoding="utf-8"))

    def to_html(self) -> str:
        return etree.tostring(
            self._root.getroottree(), method="html", encoding="unicode", doctype=self._doctype()
        )

    def _doctype(self) -> str:
        return self._source_doctype or "<!DOCTYPE html>"

    def write(self, path: str) -> None:
        Path(path).write_text(self.to_html(), encoding="utf-8")

    def _first(self, xpath: str, context=None):
        found = (self._root if context is None else context).xpath(xpath)
        return found[0] if found else None

    @property
    def _body(self):
        return self._first("//body")

    # Theme

    def has_body_class(self, name: str) -> bool:
        body = self._body
        return body is not None and name in body.classes

    def set_body_class(self, name: str, enabled: bool) -> None:
        body = self._body
        if body is None:
            return
        if enabled:
            body.classes.add(name)
        else:
            body.classes.discard(name)
        if not body.get("class"):
            body.attrib.pop("class", None)

    def _stylesheet_variables(self) -> Dict[str, Dict[str, str]]:
        scopes: Dict[str, Dict[str, str]] = {"root": {}, "dark": {}}
        css = "\n".join(style.text or "" for style in self._root.xpath("//style"))
        for selectors, body in _RULE_PATTERN.findall(css):
            names = [selector.strip() for selector in selectors.split(",")]
            if any(".dark-theme" in name for name in names):
                scope = scopes["dark"]
            elif any(name in (":root", "html") for name in names):
                scope = scopes["root"]
            else:
                continue
            for name, value in _DECLARATION_PATTERN.findall(body):
                scope[name] = value.strip()
        return scopes

    def get_css_variable(self, name: str) -> str:
        scopes = self._stylesheet_variables()
        if self.has_body_class("dark-theme") and name in scopes["dark"]:
            return scopes["dark"][name]
        inline = _parse_style(self._root.get("style"))
        if name in inline:
            return inline[name]
        return scopes["root"].get(name, "")

    def set_css_variable(self, name: str, value: str) -> None:
        _set_style(self._root, name, value)

    # Scroll reveal

    def find_reveal_targets(self) -> List[Any]:
        return self._root.xpath(f"//*[{_has_class('reveal')}]")

    def add_class(self, element: Any, name: str) -> None:
        element.classes.add(name)

    # Stats and profile

    def _stat_element(self, key: str):
        return self._first(f"//*[{_has_class('stat-number')}][@data-stat='{key}']")

    def get_stat(self, key: str) -> Optional[str]:
        element = self._stat_element(key)
        if element is None:
            return None
        return element.text_content()

    def set_stat(self, key: str, text: str) -> None:
        element = self._stat_element(key)
        if element is not None:
            _set_text(element, text)

    def set_bio(self, text: str) -> None:
        element = self._first("//*[@id='home']//p")
        if element is not None:
            _set_text(element, text)

    def set_connect_summary(self, public_repos: int) -> None:
        element = self._first(f"//*[@id='connect']//p[{_has_class('text-center')}]")
        if element is None:
            return
        _set_inner_html(
            element,
            "You can find me on GitHub where I contribute to various projects and "
            f"maintain my own <strong>{public_repos} public repositories</strong>."
        )

    # Featured projects

    @property
    def _projects_container(self):
        return self._first(f"//*[@id='projects']//*[{_has_class('container')}]")

    def _project_items(self) -> List[Any]:
        container = self._projects_container
        if container is None:
            return []
        return container.xpath(f".//*[{_has_class('item')}]")

    def project_slot_count(self) -> Optional[int]:
        if self._projects_container is None:
            return None
        return len(self._project_items())

    def fill_project_slot(self, index: int, repo: Repository) -> None:
        items = self._project_items()
        if index >= len(items):
            return
        item = items[index]

        heading_link = self._first(".//h3//a", item)
        if heading_link is not None:
            _set_text(heading_link, repo.name)
            heading_link.set("href", repo.html_url)

        description = self._first(".//p", item)
        if description is not None:
            _set_text(description, repo.description or "No description provided.")

        meta = self._first(f".//*[{_has_class('item-meta')}]", item)
        if meta is not None:
            language_markup = f'<i class="fas fa-code"></i> {escape(repo.language)}' if repo.language else ""
            _set_inner_html(meta, language_markup)

        tags = self._first(f".//*[{_has_class('tags')}]", item)
        if tags is not None:
            markup = ""
            if repo.language:
                markup += f'<span class="tag">{escape(repo.language)}</span>'
            markup += (
                '<span class="tag"><i class="fas fa-star" style="margin-right: 4px;"></i> '
                f'{repo.stargazers_count}</span>'
                '<span class="tag"><i class="fas fa-code-branch" style="margin-right: 4px;"></i> '
                f'{repo.forks_count}</span>'
            )
            _set_inner_html(tags, markup)

    def hide_project_slot(self, index: int) -> None:
        items = self._project_items()
        if index < len(items):
            _set_style(items[index], "display", "none")

    def show_no_projects_message(self, text: str) -> None:
        container = self._projects_container
        if container is None:
            return
        message = etree.SubElement(container, "p")
        message.text = text
        message.set("style", "text-align: center; color: var(--subtle-text)")

    # Activity feed

    @property
    def _connect_container(self):
        return self._first(f"//*[@id='connect']//*[{_has_class('container')}]")

    def _achievements(self):
        container = self._connect_container
        if container is None:
            return None
        return self._first(f".//*[{_has_class('achievements')}]", container)

    def has_activity_anchor(self) -> bool:
        return self._achievements() is not None

    def remove_activity_feed(self) -> None:
        container = self._connect_container
        if container is None:
            return
        for xpath in (f".//*[{_has_class('activity-feed')}]", f".//h3[{_has_class('activity-heading')}]"):
            element = self._first(xpath, container)
            if element is not None:
                element.drop_tree()

    def insert_activity_feed(self, heading: str, items: List[ActivityItem]) -> None:
        anchor = self._achievements()
        if anchor is None:
            return

        heading_element = lxml.html.Element("h3")
        heading_element.set("class", "text-center activity-heading")
        heading_element.set("style", "margin-top: 3em; margin-bottom: 1.5em")
        heading_element.text = heading

        feed = lxml.html.Element("div")
        feed.set("class", "activity-feed")
        for item in items:
            feed.append(self._activity_item(item))

        anchor.addnext(heading_element)
        heading_element.addnext(feed)
        logger.debug(f"Rendered {len(items)} activity items")

    @staticmethod
    def _activity_item(item: ActivityItem):
        element = lxml.html.Element("div")
        element.set("class", "activity-item")
        element.set("style", "cursor: pointer")
        element.set("data-href", item.target_url)
        element.set("onclick", f"window.open({json.dumps(item.target_url)}, '_blank')")
        _set_inner_html(
            element,
            f'<div class="activity-icon"><i class="{escape(item.icon)}"></i></div>'
            '<div class="activity-content">'
            f'<div class="activity-action">{item.action_html}</div>'
            f'<div class="activity-date">{escape(item.date_text)}</div>'
            '</div>'
        )
        return element

    # Indicators

    def set_indicator(self, section: str, stale: bool, tooltip: str) -> None:
        class_name = INDICATOR_CLASSES.get(section)
        if class_name is None:
            return
        element = self._first(f"//*[{_has_class(class_name)}]")
        if element is None:
            return
        element.classes.discard(STALE_CLASS)
        if stale:
            element.classes.add(STALE_CLASS)
        element.set("title", tooltip)
