"""
rootline.config.defaults - Built-in configuration values
"""

DEFAULT_CONFIG = {
    "columns": {
        "parent": "parent",
        "child": "child",
        # Cell values treated as null (no parent)
        "null_values": [""],
    },
    "graph": {
        # "duplicate": repeat a multi-parent child under each parent
        # "reject": fail with DataIntegrityError
        "multi_parent": "duplicate",
    },
    "layout": {
        "node_width": 200,  # Depth-axis spacing between levels
        "node_height": 100,  # Sibling-axis spacing between nodes
        "canvas_width": 1000,
        "canvas_height": 600,
    },
    "render": {
        "node_radius": 8,
        "node_color": "#69b3a2",
        "link_color": "#999",
        "link_width": 1.5,
        "label_color": "#333",
        "font_size": 12,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 5005,
    },
}
