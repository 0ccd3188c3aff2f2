from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from cinequiz.services.games import GameError, GameSessionManager


games = Blueprint('games', __name__)


def get_game_manager() -> GameSessionManager:
    return current_app.extensions['game_manager']


@games.errorhandler(GameError)
def handle_game_error(error: GameError):
    if error.status >= 500:
        current_app.logger.error(f"[game-error] user={current_user.get_id()} {error}")
    else:
        current_app.logger.info(f"[game-reject] user={current_user.get_id()} {error}")
    return jsonify({'success': False, 'message': str(error)}), error.status


@games.route('/new', methods=['POST'])
@login_required
def new_game():
    """Start a game for the logged-in user."""
    view = get_game_manager().create_game(current_user.id)
    return jsonify({
        'success': True,
        'message': 'Game created successfully.',
        'data': view.to_dict(),
    }), 201


@games.route('/answer', methods=['PUT'])
@login_required
def send_answer():
    """Check the answer for the current movie and return the updated game."""
    data = request.get_json(silent=True)
    answer = data.get('answer') if isinstance(data, dict) else None
    review = get_game_manager().submit_answer(current_user.id, answer)
    return jsonify({
        'success': True,
        'message': 'Answer computed successfully.',
        'data': review.to_dict(),
    }), 201
