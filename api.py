"""
Flask Web Adapter for QueueCalc
Serves the button grid and delivers button presses to per-session calculators
"""
import logging

from flask import Flask, jsonify, request, send_from_directory, session
from flask_cors import CORS

import config
from session_manager import SessionManager

logger = logging.getLogger(__name__)

app = Flask(__name__, static_folder=config.WEB_DIR, static_url_path='')
app.secret_key = config.SECRET_KEY
CORS(app)  # Enable CORS for all routes

# One calculator per browser session
session_manager = SessionManager()


def current_session_id():
    """Return this browser's calculator id, assigning one on first request"""
    session_id = session.get('calculator_id')
    if session_id is None:
        session_id = session_manager.new_session_id()
        session['calculator_id'] = session_id
    return session_id


def request_value(name):
    """Read a field from a JSON body, falling back to form data and query args"""
    data = request.get_json(silent=True) or {}
    value = data.get(name)
    if value is None:
        value = request.values.get(name)
    return value


@app.route('/')
def index():
    """Serve the calculator button grid"""
    return send_from_directory(config.WEB_DIR, 'index.html')


@app.route('/api')
def api_info():
    """API information page"""
    return f"""
    <html>
    <head><title>{config.APP_NAME} API</title></head>
    <body style="font-family: Arial; padding: 40px; background: #1a1a2e; color: white;">
        <h1>{config.APP_NAME} API Server</h1>
        <p>API is running! Open the calculator at <a href="/" style="color: #4CAF50;">Home</a></p>
        <h2>Available Endpoints:</h2>
        <ul>
            <li>POST /api/symbol - Deliver one button press</li>
            <li>POST /api/keys - Deliver a key stream such as 2+3=</li>
            <li>POST /api/clear - Clear the calculator</li>
            <li><a href="/api/display" style="color: #2196F3;">/api/display</a> - Current display</li>
            <li><a href="/api/history" style="color: #2196F3;">/api/history</a> - Calculation history</li>
        </ul>
    </body>
    </html>
    """


@app.route('/api/symbol', methods=['POST'])
def deliver_symbol():
    """Deliver one symbol (digit, '.', operator, '=' or 'C')"""
    try:
        token = request_value('symbol')
        if token is None:
            return jsonify({'success': False, 'error': "Missing 'symbol'"}), 400
        result = session_manager.deliver(current_session_id(), token)
        return jsonify({
            'success': True,
            'data': {
                'display': result['display'],
                'changed': result['changed'],
                'error': result['error'],
            }
        })
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except Exception as e:
        logger.exception("Symbol delivery failed")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/keys', methods=['POST'])
def deliver_keys():
    """Deliver a whole key stream in order"""
    try:
        keys = request_value('keys')
        if not isinstance(keys, str):
            return jsonify({'success': False, 'error': "Missing 'keys'"}), 400
        result = session_manager.deliver_keys(current_session_id(), keys)
        return jsonify({'success': True, 'data': result})
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except Exception as e:
        logger.exception("Key stream delivery failed")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/clear', methods=['POST'])
def clear():
    """Clear operands, pending operator and display"""
    try:
        result = session_manager.deliver(current_session_id(), 'clear')
        return jsonify({'success': True, 'data': {'display': result['display']}})
    except Exception as e:
        logger.exception("Clear failed")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/display')
def get_display():
    """Get the current display without changing it"""
    try:
        display = session_manager.get_display(current_session_id())
        return jsonify({'success': True, 'data': {'display': display}})
    except Exception as e:
        logger.exception("Display lookup failed")
        return jsonify({'success': False, 'error': str(e)}), 500


@app.route('/api/history', methods=['GET', 'DELETE'])
def history():
    """Get or clear this session's calculation history"""
    try:
        session_id = current_session_id()
        if request.method == 'DELETE':
            session_manager.clear_history(session_id)
            return jsonify({'success': True, 'data': [], 'count': 0})

        limit = int(request.args.get('limit', 50))
        formatted = []
        for expression, result, timestamp in session_manager.get_history(session_id, limit):
            formatted.append({
                'expression': expression,
                'result': result,
                'timestamp': timestamp
            })

        return jsonify({
            'success': True,
            'data': formatted,
            'count': len(formatted)
        })
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except Exception as e:
        logger.exception("History lookup failed")
        return jsonify({'success': False, 'error': str(e)}), 500
