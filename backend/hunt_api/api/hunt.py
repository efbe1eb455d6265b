import re

from flask import Blueprint, abort, current_app, jsonify, request
from hunt_api.errors import HuntError
from hunt_api.services.hunt.answers import register_answer as svc_register_answer
from hunt_api.services.hunt.challenges import (
    finish_challenge as svc_finish_challenge,
    register_challenge as svc_register_challenge,
)
from hunt_api.services.hunt.questions import select_question as svc_select_question


hunt = Blueprint('hunt', __name__)

_GROUP_ID_TAIL = re.compile(r'(\w+)$', re.ASCII)


def _json_object():
    # Arrays and scalars carry none of the expected fields
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@hunt.errorhandler(HuntError)
def handle_hunt_error(exc: HuntError):
    if exc.status_code < 500:
        current_app.logger.warning(f"[{request.endpoint}] {exc.status_code} {exc.message}")
    payload = {'success': False, 'message': exc.message}
    if isinstance(exc.details, str):
        payload['error'] = exc.details
    return jsonify(payload), exc.status_code


@hunt.route('/answer/register', methods=['POST'])
def register_answer():
    data = _json_object()
    counter = svc_register_answer(
        data.get('GroupId'),
        data.get('QuestionId'),
        data.get('Result'),
        data.get('ChallengerAnswer'),
    )
    return jsonify({'success': True, 'message': f'{counter} successfully updated'})


@hunt.route('/finish', methods=['POST'], defaults={'trail': ''})
@hunt.route('/finish/<path:trail>', methods=['POST'])
def finish_challenge(trail):
    # Only the last path segment names the room
    room_code = trail.split('/')[-1]
    data = _json_object()
    elapsed = svc_finish_challenge(room_code, data.get('result'))
    payload = {'success': True, 'message': 'Room and challenge processed successfully'}
    if elapsed is not None:
        payload['ElapsedTime'] = elapsed
    return jsonify(payload)


@hunt.route('/<path:prefix>/getQuestion/<int:level>', methods=['GET'])
def get_question(prefix, level):
    match = _GROUP_ID_TAIL.search(prefix)
    if not match:
        abort(404)
    group_id = match.group(1)
    try:
        question = svc_select_question(level, group_id)
    except HuntError as exc:
        # Question lookups answer with {error, details} rather than {success, message}
        if exc.status_code < 500:
            current_app.logger.warning(f"[question] group={group_id} level={level}: {exc.message}")
        payload = {'error': exc.message}
        if exc.details:
            payload['details'] = exc.details
        return jsonify(payload), exc.status_code
    return jsonify(question.to_dict())


@hunt.route('/adminui/regChallenge', methods=['POST'])
@hunt.route('/<path:prefix>/adminui/regChallenge', methods=['POST'])
def register_challenge(prefix=None):
    data = _json_object()
    challenge = svc_register_challenge(
        data.get('GroupName'),
        data.get('playerCount'),
        data.get('difficulty'),
        data.get('dupCheck'),
    )
    return jsonify({
        'success': True,
        'message': 'Challenge registered successfully',
        'GroupId': challenge.group_id,
        'ChallengeId': challenge.challenge_id,
    })
