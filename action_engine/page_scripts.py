"""In-page scripts shared by the executor and the Playwright adapter.

Each script is a function expression taking a single argument, matching
how ``Page.evaluate`` forwards its ``arg``.
"""

from __future__ import annotations

# Set the value directly and fire synthetic events; some frameworks only
# observe input/change and ignore native clearing.
CLEAR_VALUE_SCRIPT = """
    (selector) => {
        const el = document.querySelector(selector);
        if (el) {
            el.value = '';
            el.dispatchEvent(new Event('input', { bubbles: true }));
            el.dispatchEvent(new Event('change', { bubbles: true }));
        }
    }
"""

SCROLL_ELEMENT_SCRIPT = """
    ({ selector, x, y, behavior }) => {
        const el = document.querySelector(selector);
        if (el) {
            el.scrollTo({ left: x || 0, top: y || 0, behavior: behavior || 'auto' });
        }
    }
"""

SCROLL_WINDOW_SCRIPT = """
    ({ x, y, behavior }) => {
        window.scrollTo({ left: x || 0, top: y || 0, behavior: behavior || 'auto' });
    }
"""

SCROLL_INTO_VIEW_SCRIPT = """
    ({ selector, block, inline, behavior }) => {
        const el = document.querySelector(selector);
        if (el) {
            el.scrollIntoView({
                block: block || 'center',
                inline: inline || 'nearest',
                behavior: behavior || 'auto'
            });
        }
    }
"""

FIRST_MATCH_VISIBLE_SCRIPT = """
    (selector) => {
        const el = document.querySelector(selector);
        if (!el) return false;
        const style = window.getComputedStyle(el);
        return style.display !== 'none' && style.visibility !== 'hidden' && style.opacity !== '0';
    }
"""
