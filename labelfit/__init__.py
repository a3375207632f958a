from os import path, getenv
import logging
from flask import Flask, jsonify, request
from dotenv import load_dotenv
from labelfit.layout import PillowMetrics, TextStyle, create_text_element, line_budget, wrap_label_lines

load_dotenv()

thisDir = path.dirname(path.abspath(__file__))


class Config:
    """Application configuration."""
    FONT_DIR = getenv("FONT_DIR", path.join(thisDir, "..", "fonts"))
    DEFAULT_FONT = getenv("DEFAULT_FONT", "")
    DEFAULT_FONT_SIZE = int(getenv("DEFAULT_FONT_SIZE", "12"))
    DEFAULT_LINE_HEIGHT = float(getenv("DEFAULT_LINE_HEIGHT")) if getenv("DEFAULT_LINE_HEIGHT") else None
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

metrics = PillowMetrics(Config.FONT_DIR)

app = Flask(__name__)

@app.before_request
def log_post_json_requests():
    if request.method == "POST" and request.is_json:
        json_data = request.get_json()
        endpoint = request.endpoint or request.path
        logging.info(f"POST JSON Request to {endpoint} - Data: {json_data}")

@app.route("/")
def home_route():
    return "Fonts %s, default %s %spt" % (Config.FONT_DIR, Config.DEFAULT_FONT or "(built-in)", Config.DEFAULT_FONT_SIZE)

def get_params():
    """Extract and validate parameters from request."""
    # Handle different data sources
    if request.method == "POST" and request.is_json:
        source = request.get_json()
        logging.debug(f"POST JSON request - Data: {source}")
    elif request.method == "POST":
        source = request.form
        logging.debug(f"POST form request - Data: {dict(source)}")
    else:
        source = request.args
        logging.debug(f"GET request - Query params: {dict(source)}")

    for field in ('max_width', 'max_height'):
        if source.get(field) in (None, ''):
            raise ValueError(f"Missing parameter '{field}'")

    style = TextStyle(
        font_family=str(source.get('font') or Config.DEFAULT_FONT),
        font_size=int(source.get('font_size') or Config.DEFAULT_FONT_SIZE),
        line_height=float(source['line_height']) if source.get('line_height') else Config.DEFAULT_LINE_HEIGHT,
    )
    if style.font_size <= 0:
        raise ValueError(f"Font size must be positive, got {style.font_size}")
    if source.get('color'):
        style = style.with_color(str(source['color']))

    return (
        str(source.get('text', '')),
        style,
        float(source['max_width']),
        float(source['max_height']),
        _get_flag(source, 'allow_overflow'),
        _get_flag(source, 'multiline'),
    )

def _get_flag(source, name):
    """Read a boolean from JSON booleans or form/query strings."""
    value = source.get(name, False)
    if isinstance(value, bool):
        return value
    return str(value).lower() in ('1', 'true', 'yes', 'on')

@app.route("/wrap", methods=["GET", "POST"])
def wrap_route():
    """Wrap label text to fit a box and return the lines."""
    logging.debug(f"Wrap endpoint: {request.method} {request.url}")
    try:
        text, style, max_width, max_height, allow_overflow, multiline = get_params()
        element = create_text_element(text, style, metrics)
        lines = wrap_label_lines(
            element, metrics, max_width, max_height,
            allow_overflow=allow_overflow, multiline=multiline
        )
    except ValueError as e:
        return f"Invalid request: {e}", 400

    return jsonify({
        "lines": [_describe_line(line) for line in lines],
        "max_lines": line_budget(style, max_height),
        "fits": bool(lines),
    })

def _describe_line(line):
    text = line.text
    measurement = metrics.measure(text, line.style)
    return {
        "text": text,
        "width": measurement.horizontal_slice_width,
        "height": measurement.vertical_slice_width,
        "baseline": measurement.baseline,
    }
