from __future__ import annotations
import html
import json
import logging
import os
from string import Template
from typing import Any, Dict, Optional
from .models import Node, SortPolicy
from .utils import format_bytes

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = Template(r"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>File Size Tree - ${title}</title>
    <style>
        body {
            font-family: 'Courier New', monospace;
            margin: 20px;
            background-color: #f5f5f5;
        }
        .container {
            background-color: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 10px rgba(0,0,0,0.1);
        }
        h1 { color: #333; margin-bottom: 20px; }
        .tree { font-size: 14px; line-height: 1.4; white-space: pre; }
        .tree-item {
            margin: 2px 0;
            user-select: none;
            padding: 2px 0;
        }
        .tree-item.toggleable { cursor: pointer; }
        .tree-item:hover { background-color: #f0f0f0; }
        .folder { color: #0066cc; font-weight: bold; }
        .file { color: #333; }
        .size { color: #666; font-weight: normal; }
        .toggle {
            display: inline-block;
            width: 16px;
            text-align: center;
            margin-right: 4px;
        }
        .hidden { display: none; }
        .connector { color: #999; }
        .controls {
            margin-bottom: 20px;
            padding: 15px;
            background-color: #f8f9fa;
            border-radius: 5px;
            border: 1px solid #e9ecef;
        }
        .control-group { display: inline-block; margin-right: 20px; }
        .control-group label { font-weight: bold; margin-right: 8px; color: #495057; }
        .control-group select, .control-group button {
            padding: 5px 10px;
            border: 1px solid #ced4da;
            border-radius: 3px;
            background-color: white;
            font-family: inherit;
        }
        .control-group button {
            background-color: #007bff;
            color: white;
            cursor: pointer;
            margin-left: 10px;
        }
        .control-group button:hover { background-color: #0056b3; }
    </style>
</head>
<body>
    <div class="container">
        <h1>File Size Tree: ${title}</h1>
        <div class="controls">
            <div class="control-group">
                <label for="sortBy">Sort by:</label>
                <select id="sortBy">
                    <option value="name">Name</option>
                    <option value="size">Size</option>
                </select>
            </div>
            <div class="control-group">
                <label for="sortOrder">Order:</label>
                <select id="sortOrder">
                    <option value="normal">Normal</option>
                    <option value="reverse">Reversed</option>
                </select>
            </div>
            <div class="control-group">
                <button onclick="applySorting()">Apply Sort</button>
                <button onclick="expandAll()">Expand All</button>
                <button onclick="collapseAll()">Collapse All</button>
            </div>
        </div>
        <div class="tree" id="fileTree"></div>
    </div>
    <script>
        const treeData = ${tree_json};
        const initialSort = ${initial_sort};

        function span(cls, text) {
            const el = document.createElement('span');
            el.className = cls;
            el.textContent = text;
            return el;
        }

        function renderTree(data, container, prefix, isLast, isRoot) {
            const item = document.createElement('div');
            item.className = 'tree-item ' + (data.isDir ? 'folder' : 'file');

            const connector = isRoot ? '' : (isLast ? '└── ' : '├── ');
            const hasChildren = data.children && data.children.length > 0;

            item.appendChild(span('connector', prefix + connector));
            if (hasChildren) {
                item.appendChild(span('toggle', '▼'));
                item.classList.add('toggleable');
                item.onclick = function() { toggleFolder(this); };
            }
            item.appendChild(document.createTextNode((data.isDir ? data.name + '/' : data.name) + ' '));
            item.appendChild(span('size', '(' + data.sizeStr + ')'));
            item.title = data.path;
            container.appendChild(item);

            if (hasChildren) {
                const childrenContainer = document.createElement('div');
                childrenContainer.className = 'children';
                const newPrefix = prefix + (isLast ? '    ' : '│   ');
                const last = data.children.length - 1;
                data.children.forEach((child, i) => {
                    renderTree(child, childrenContainer, newPrefix, i === last, false);
                });
                container.appendChild(childrenContainer);
            }
        }

        function toggleFolder(element) {
            const children = element.nextElementSibling;
            const toggle = element.querySelector('.toggle');
            if (children && children.classList.contains('children')) {
                const hidden = children.classList.toggle('hidden');
                toggle.textContent = hidden ? '▶' : '▼';
            }
        }

        // Mirrors the command-line ordering: directories first for name,
        // largest first for size, and "reverse" flips the whole comparator.
        function compareNodes(a, b, sortBy) {
            if (sortBy === 'size') {
                return b.size - a.size;
            }
            if (a.isDir !== b.isDir) {
                return a.isDir ? -1 : 1;
            }
            const an = a.name.toLowerCase();
            const bn = b.name.toLowerCase();
            return an < bn ? -1 : (an > bn ? 1 : 0);
        }

        function sortTreeData(data, sortBy, reverse) {
            const sortedData = JSON.parse(JSON.stringify(data));
            function sortRecursive(node) {
                if (!node.children) return;
                node.children.forEach(sortRecursive);
                node.children.sort((a, b) => {
                    const result = compareNodes(a, b, sortBy);
                    return reverse ? -result : result;
                });
            }
            sortRecursive(sortedData);
            return sortedData;
        }

        function applySorting() {
            const sortBy = document.getElementById('sortBy').value;
            const reverse = document.getElementById('sortOrder').value === 'reverse';
            const sortedData = sortTreeData(treeData, sortBy, reverse);
            const container = document.getElementById('fileTree');
            container.textContent = '';
            renderTree(sortedData, container, '', true, true);
        }

        function setToggles(hidden) {
            document.querySelectorAll('.children').forEach(element => {
                element.classList.toggle('hidden', hidden);
                const toggle = element.previousElementSibling.querySelector('.toggle');
                if (toggle) toggle.textContent = hidden ? '▶' : '▼';
            });
        }

        function expandAll() { setToggles(false); }

        function collapseAll() { setToggles(true); }

        document.addEventListener('DOMContentLoaded', function() {
            document.getElementById('sortBy').value = initialSort.key;
            document.getElementById('sortOrder').value = initialSort.reverse ? 'reverse' : 'normal';
            applySorting();
        });
    </script>
</body>
</html>
""")

def _utf8_text(text: str) -> str:
    # Undecodable filename bytes become U+FFFD.
    return os.fsencode(text).decode("utf-8", "replace")

def node_to_record(node: Node) -> Dict[str, Any]:
    return {
        "name": _utf8_text(node.name),
        "size": node.size,
        "sizeStr": format_bytes(node.size),
        "isDir": node.is_dir,
        "path": _utf8_text(node.path),
        "children": [node_to_record(c) for c in node.children],
    }

def _script_safe(text: str) -> str:
    # Keeps "</script>" inside names from closing the embedding tag.
    return text.replace("</", "<\\/")

def tree_to_json(root: Node) -> str:
    return _script_safe(json.dumps(node_to_record(root), ensure_ascii=False, indent=2))

def render_html(root: Node, target_dir: str, policy: Optional[SortPolicy] = None) -> str:
    """Return the self-contained HTML page for ``root``.

    The page carries the tree as an inline JSON blob; its script re-sorts and
    redraws it in the browser starting from ``policy``.
    """
    if policy is None:
        policy = SortPolicy()
    initial = {"key": policy.key.value, "reverse": policy.reverse}
    return PAGE_TEMPLATE.substitute(
        title=html.escape(_utf8_text(target_dir)),
        tree_json=tree_to_json(root),
        initial_sort=json.dumps(initial),
    )

def write_html(root: Node, target_dir: str, output_path: str,
               policy: Optional[SortPolicy] = None) -> None:
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(render_html(root, target_dir, policy))
    logger.debug("Wrote HTML tree for %s to %s", target_dir, output_path)
