import base64
import io
import json
import os

import qrcode
from PIL import Image, ImageDraw, ImageFont

from stockledger.config import settings
from stockledger.models.product import Product

# Label layout constants: 2x1 inch at 300 DPI
DPI = 300
LABEL_W = int(2 * DPI)   # 600
LABEL_H = int(1 * DPI)   # 300
QR_SIZE = LABEL_H - 20   # 280, nearly full height with small margin
PADDING = 10


def _get_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Try system fonts, fallback to default."""
    font_paths = [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
        "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    ]
    for fp in font_paths:
        if os.path.exists(fp):
            return ImageFont.truetype(fp, size)
    return ImageFont.load_default()


def _make_qr(data: str, box_size: int = 8) -> Image.Image:
    qr = qrcode.QRCode(version=None, error_correction=qrcode.constants.ERROR_CORRECT_M, box_size=box_size, border=1)
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("RGB")


def _draw_label_2x1(qr_data: str, lines: list[tuple[int, str, str]]) -> Image.Image:
    """Create a 2x1 inch label: QR on left, text lines of (font size, text, color) on right."""
    qr_img = _make_qr(qr_data).resize((QR_SIZE, QR_SIZE), Image.NEAREST)

    img = Image.new("RGB", (LABEL_W, LABEL_H), "white")
    draw = ImageDraw.Draw(img)
    img.paste(qr_img, (PADDING, (LABEL_H - QR_SIZE) // 2))

    text_x = PADDING + QR_SIZE + PADDING
    text_area_w = LABEL_W - text_x - PADDING

    total_text_h = 0
    rendered_lines = []
    for size, text, color in lines:
        font = _get_font(size)
        # Truncate if too wide
        while text and draw.textbbox((0, 0), text, font=font)[2] > text_area_w and len(text) > 3:
            text = text[:-4] + "..."
        line_h = size + max(6, size // 4)
        rendered_lines.append((font, text, color, line_h))
        total_text_h += line_h

    y = max(PADDING, (LABEL_H - total_text_h) // 2)
    for font, text, color, line_h in rendered_lines:
        draw.text((text_x, y), text, fill=color, font=font)
        y += line_h

    draw.rectangle([(0, 0), (LABEL_W - 1, LABEL_H - 1)], outline="#cccccc", width=1)
    return img


def product_qr_payload(product: Product) -> str:
    """JSON encoded into a product's QR code."""
    return json.dumps({
        "id": product.id,
        "stock_code": product.stock_code,
        "product_name": product.product_name,
        "serial_number": product.serial_number,
    })


def generate_qr_data_url(product: Product) -> str:
    """QR code of the product payload as a PNG data URL."""
    buf = io.BytesIO()
    _make_qr(product_qr_payload(product), box_size=6).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def generate_product_label(product: Product) -> bytes:
    """Printable 2x1 inch label for a product. Returns PNG bytes."""
    base = settings.BASE_URL.rstrip("/")
    qr_data = f"{base}/api/v1/products/{product.id}"

    lines = [
        (38, product.stock_code, "#000000"),
        (28, product.product_name, "#333333"),
    ]
    if product.serial_number:
        lines.append((20, f"S/N: {product.serial_number}", "#888888"))
    if product.sale_price > 0:
        lines.append((24, f"{product.sale_price:.2f}", "#667eea"))

    img = _draw_label_2x1(qr_data, lines)

    buf = io.BytesIO()
    img.save(buf, format="PNG", dpi=(DPI, DPI))
    return buf.getvalue()
