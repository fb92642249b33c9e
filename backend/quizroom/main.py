from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    services = current_app.extensions['quizroom']
    return jsonify({'message': 'Welcome to the quiz room server!', 'rooms': len(services.registry)})
