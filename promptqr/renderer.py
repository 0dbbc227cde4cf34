"""QR image renderer for finished PromptPay payloads.

The payload is treated as opaque text; errors raised by ``qrcode`` or Pillow
propagate to the caller untouched.
"""
from __future__ import annotations

import base64
import html
import io

import qrcode
from PIL import Image, ImageDraw, ImageFont
from qrcode.image.svg import SvgPathImage

from .config import RenderConfig

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}

DEFAULT_RENDER = RenderConfig()


def _make_qr(data: str, render: RenderConfig) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[render.error_correction],
        box_size=render.box_size,
        border=render.border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def generate_qr_image(data: str, render: RenderConfig = DEFAULT_RENDER) -> Image.Image:
    """Generate QR image with a framed label underneath."""

    qr_img = _make_qr(data, render).make_image(fill_color=render.dark_color, back_color=render.light_color).convert("RGBA")
    width, height = qr_img.size
    if not render.title:
        return qr_img

    label_height = 40
    margin = 40
    canvas_width = width + margin * 2
    canvas_height = height + margin * 2 + label_height

    canvas = Image.new("RGBA", (canvas_width, canvas_height), color="#F5F7FA")
    canvas.paste(qr_img, (margin, margin))

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    text = render.title.upper()
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    text_x = (canvas_width - (right - left)) // 2
    text_y = margin + height + (label_height - (bottom - top)) // 2
    draw.rectangle(
        [(margin // 2, margin + height), (canvas_width - margin // 2, margin + height + label_height)],
        fill="#FFFFFF",
    )
    draw.text((text_x, text_y), text, fill="#1F2937", font=font)

    return canvas


def render_png(data: str, render: RenderConfig = DEFAULT_RENDER) -> bytes:
    buffer = io.BytesIO()
    generate_qr_image(data, render).save(buffer, format="PNG")
    return buffer.getvalue()


def render_png_base64(data: str, render: RenderConfig = DEFAULT_RENDER) -> str:
    """Render payload into a ``data:image/png;base64`` URI."""

    encoded = base64.b64encode(render_png(data, render)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def render_svg(data: str, render: RenderConfig = DEFAULT_RENDER) -> str:
    """Render payload as a standalone SVG document (colours and label are PNG-only)."""

    image = _make_qr(data, render).make_image(image_factory=SvgPathImage)
    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue().decode("utf-8")


def render_html_img(data: str, render: RenderConfig = DEFAULT_RENDER, alt: str = "PromptPay QR Code") -> str:
    src = render_png_base64(data, render)
    return f'<img src="{src}" alt="{html.escape(alt, quote=True)}" />'
