import os
import io
import json
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List

from flask import Flask, request, jsonify, send_file, Response, stream_with_context

from iplookup.config import LIST_CATEGORIES, get_settings
from iplookup.csv_export import results_to_csv
from iplookup.errors import AddressProcessingError, AddressSyntaxError, BatchValidationError
from iplookup.ip_validator import is_valid_ip, parse_ip_text, validate_ips
from iplookup.lookup import lookup_batch, lookup_ip
from iplookup.models import LookupFailure
from iplookup.module_executor import module_executor

logger = logging.getLogger(__name__)

settings = get_settings()

console_handler = logging.StreamHandler()
console_handler.setLevel(settings.log_level)
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)

for logger_name in (__name__, 'iplookup'):
    named_logger = logging.getLogger(logger_name)
    named_logger.setLevel(settings.log_level)
    if console_handler not in named_logger.handlers:
        named_logger.addHandler(console_handler)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024
app.json.sort_keys = False
app.config['DEBUG'] = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'


@app.errorhandler(BatchValidationError)
def handle_batch_validation_error(error: BatchValidationError):
    body: Dict[str, Any] = {'error': error.message}
    if isinstance(error, AddressSyntaxError):
        body['invalid'] = error.invalid_ips
    return jsonify(body), 400


@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/lists', methods=['GET'])
def lists():
    """Blocklist categories, zone and the loaded lookup modules"""
    current = get_settings()
    return jsonify({
        'zone': current.blocklist_zone,
        'lists': [{'code': code, 'list': name} for code, name in LIST_CATEGORIES.items()],
        'modules': [module.get_config() for module in module_executor.modules.values()],
    })


def _get_ips_from_request() -> List[str]:
    """Read and validate the "ips" array from the JSON body"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise BatchValidationError()
    return validate_ips(body.get('ips'))


@app.route('/api/iplookup', methods=['POST'])
async def iplookup_batch():
    """Look up a batch of addresses concurrently"""
    ips = _get_ips_from_request()

    try:
        outcomes = await lookup_batch(ips, get_settings())
        return jsonify([outcome.to_dict() for outcome in outcomes])
    except Exception as e:
        logger.error(f"Error in iplookup endpoint: {str(e)}", exc_info=True)
        # SECURITY: Don't expose internal error details to client
        return jsonify({'error': 'Internal server error'}), 500


@app.route('/api/iplookup/stream', methods=['POST'])
def iplookup_stream():
    """Look up addresses one at a time, streaming progress via Server-Sent Events (SSE)"""
    ips = _get_ips_from_request()
    current = get_settings()

    def generate():
        total = len(ips)
        failed = []

        for index, ip in enumerate(ips):
            yield f"data: {json.dumps({'event': 'processing', 'index': index, 'total': total, 'ip': ip})}\n\n"
            try:
                result = asyncio.run(lookup_ip(ip, current))
                yield f"data: {json.dumps({'event': 'result', 'index': index, 'result': result.to_dict()})}\n\n"
            except AddressProcessingError as e:
                logger.error(f"Streaming lookup failed for {ip}: {e.reason}")
                failed.append(ip)
                yield f"data: {json.dumps({'event': 'failed', 'index': index, 'ip': ip, 'error': LookupFailure(ip).error})}\n\n"
            except Exception as e:
                logger.error(f"Unexpected error in streaming lookup for {ip}: {e}", exc_info=True)
                failed.append(ip)
                yield f"data: {json.dumps({'event': 'failed', 'index': index, 'ip': ip, 'error': LookupFailure(ip).error})}\n\n"

        logger.info(f"Streaming lookup finished: {total - len(failed)}/{total} succeeded")
        yield f"data: {json.dumps({'event': 'completed', 'total': total, 'failed': failed})}\n\n"

    return Response(stream_with_context(generate()), mimetype='text/event-stream')


@app.route('/api/parse', methods=['POST'])
def parse():
    """Split uploaded or pasted text into address candidates"""
    text = None

    uploaded = request.files.get('file')
    if uploaded is not None:
        text = uploaded.read().decode('utf-8', errors='replace')
    else:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            text = body.get('text')
        if text is None:
            text = request.form.get('text')

    if not isinstance(text, str):
        return jsonify({'error': 'No text or file provided'}), 400

    ips = parse_ip_text(text)
    if not ips:
        return jsonify({'error': 'Please provide at least one IP address'}), 400

    return jsonify({
        'ips': ips,
        'invalid': [ip for ip in ips if not is_valid_ip(ip)],
    })


@app.route('/api/export', methods=['POST'])
def export():
    """Download lookup results as CSV"""
    data = request.get_json(silent=True)
    results = data.get('results') if isinstance(data, dict) else data

    if not isinstance(results, list) or not results:
        return jsonify({'error': 'No results found to export'}), 400

    try:
        content = results_to_csv(results)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error exporting results: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500

    return send_file(
        io.BytesIO(content.encode('utf-8')),
        mimetype='text/csv',
        as_attachment=True,
        download_name=f"ip_lookup_results_{datetime.now().strftime('%Y-%m-%d')}.csv"
    )


if __name__ == '__main__':
    app.run(debug=app.config['DEBUG'], use_reloader=False)
