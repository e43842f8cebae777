"""
Barq Preview: Device Frame

Hosts a preview document inside a sandboxed iframe sized for a device.
The iframe may run scripts but gets no access to the hosting page.
"""

from __future__ import annotations

from html import escape as _html_escape

# device → (width, height)
DEVICE_SIZES: dict[str, tuple[str, str]] = {
    "desktop": ("100%", "100%"),
    "tablet": ("768px", "1024px"),
    "mobile": ("375px", "667px"),
}

FRAME_TITLE = "معاينة الموقع"


def render_frame(document: str, device: str = "desktop") -> str:
    """
    Render an HTML page holding `document` in an iframe via srcdoc.

    Raises:
        ValueError: If the device preset is unknown
    """
    if device not in DEVICE_SIZES:
        raise ValueError(f"Unknown device {device!r}, expected one of {sorted(DEVICE_SIZES)}")

    width, height = DEVICE_SIZES[device]
    srcdoc = _html_escape(document, quote=True)

    return f"""<!DOCTYPE html>
<html lang="ar" dir="rtl">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{FRAME_TITLE}</title>
<style>
html, body {{ margin: 0; height: 100%; background: #f4f4f5; }}
.frame {{ display: flex; align-items: center; justify-content: center; height: 100%; padding: 16px; box-sizing: border-box; }}
iframe {{ border: 0; background: #fff; box-shadow: 0 10px 30px rgba(0, 0, 0, 0.12); }}
</style>
</head>
<body>
<div class="frame">
<iframe srcdoc="{srcdoc}" sandbox="allow-scripts" title="{FRAME_TITLE}" data-device="{device}" style="width: {width}; height: {height}"></iframe>
</div>
</body>
</html>"""
