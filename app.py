import logging

from flask import Flask, Blueprint, request, jsonify, abort, current_app
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import MAX_INGREDIENTS, MAX_WEIGHT, MAX_PERCENTAGE
from models import db, default_draft, ingredients_from_list
from services import recalculation
from services.calculations import calculate_total_weight, get_total_flour_weight, get_flour_count
from services.codec import build_share_fragment, decode_recipe
from services.recipes import (
    RecipeStoreError, recipe_to_draft, list_recipes, get_recipe,
    save_recipe, update_recipe, delete_recipe,
)
from utils.numbers import is_finite_number, parse_bool
from utils.sanitizer import sanitize_recipe_title, sanitize_description, sanitize_notes, sanitize_ingredient_name

migrate = Migrate()

api = Blueprint('api', __name__, url_prefix='/api')


# ============================================
# REQUEST HELPERS
# ============================================

def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        abort(400, description='Request body must be a JSON object')
    return body


def _require_number(body, key, max_val):
    value = body.get(key)
    if not is_finite_number(value):
        abort(400, description=f"'{key}' must be a number")
    if value > max_val:
        abort(400, description=f"'{key}' must be at most {max_val:g}")
    return value


def _require_id(body, key):
    value = body.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        abort(400, description=f"'{key}' must be an integer id")
    return value


def _read_ingredients(body, required=True):
    if 'ingredients' not in body:
        if required:
            abort(400, description="'ingredients' is required")
        return None
    items = body['ingredients']
    if isinstance(items, list) and len(items) > MAX_INGREDIENTS:
        abort(400, description=f'At most {MAX_INGREDIENTS} ingredients are allowed')
    try:
        return ingredients_from_list(items)
    except ValueError as e:
        abort(400, description=str(e))


def _snapshot_response(ingredients, changed=True):
    return {
        'ingredients': [ing.to_dict() for ing in ingredients],
        'total_weight': calculate_total_weight(ingredients),
        'total_flour_weight': get_total_flour_weight(ingredients),
        'flour_count': get_flour_count(ingredients),
        'changed': changed,
    }


def _recipe_response(recipe):
    data = recipe.to_dict()
    draft = recipe_to_draft(recipe)
    data['ingredients'] = [ing.to_dict() for ing in draft.ingredients]
    return data


# ============================================
# ROUTES - CALCULATOR
# ============================================

# action -> (engine function, argument readers)
EDIT_ACTIONS = {
    'amount': (recalculation.update_amount,
               (lambda b: _require_id(b, 'id'), lambda b: _require_number(b, 'amount', MAX_WEIGHT))),
    'percentage': (recalculation.update_percentage,
                   (lambda b: _require_id(b, 'id'),
                    lambda b: _require_number(b, 'percentage', MAX_PERCENTAGE))),
    'toggle-flour': (recalculation.toggle_flour,
                     (lambda b: _require_id(b, 'id'),)),
    'total-weight': (recalculation.set_total_weight,
                     (lambda b: _require_number(b, 'total_weight', MAX_WEIGHT),)),
    'remove': (recalculation.remove_ingredient,
               (lambda b: _require_id(b, 'id'),)),
    'reorder': (recalculation.reorder_ingredients,
                (lambda b: _require_id(b, 'dragged_id'), lambda b: _require_id(b, 'target_id'))),
    'add': (recalculation.add_ingredient,
            (lambda b: _require_id(b, 'id'), lambda b: sanitize_ingredient_name(b.get('name', '')))),
    'rename': (recalculation.update_name,
               (lambda b: _require_id(b, 'id'), lambda b: sanitize_ingredient_name(b.get('name', '')))),
}


@api.route('/defaults')
def defaults():
    draft = default_draft()
    data = draft.to_dict()
    data['fragment'] = build_share_fragment(draft.ingredients, draft.notes)
    return jsonify(data)


@api.route('/ingredients/<action>', methods=['POST'])
def edit_ingredients(action):
    if action not in EDIT_ACTIONS:
        abort(404, description=f'Unknown action: {action}')

    edit, readers = EDIT_ACTIONS[action]
    body = _json_body()
    ingredients = _read_ingredients(body)
    args = [read(body) for read in readers]

    updated = edit(ingredients, *args)
    return jsonify(_snapshot_response(updated, changed=updated is not ingredients))


# ============================================
# ROUTES - SHARING
# ============================================

@api.route('/share', methods=['POST'])
def share_encode():
    body = _json_body()
    ingredients = _read_ingredients(body)
    notes = sanitize_notes(body.get('notes', ''))

    fragment = build_share_fragment(ingredients, notes)
    if not fragment:
        abort(400, description='Recipe could not be encoded')
    return jsonify({'fragment': fragment})


@api.route('/share/<path:token>')
def share_decode(token):
    draft = decode_recipe(token)
    if draft is None:
        abort(400, description='Invalid share token')
    return jsonify(draft.to_dict())


# ============================================
# ROUTES - SAVED RECIPES
# ============================================

@api.route('/recipes')
def recipes_list():
    return jsonify([recipe.to_dict() for recipe in list_recipes()])


@api.route('/recipes', methods=['POST'])
def recipe_add():
    body = _json_body()
    ingredients = _read_ingredients(body)

    recipe = save_recipe(
        title=sanitize_recipe_title(body.get('title')),
        description=sanitize_description(body.get('description', '')),
        notes=sanitize_notes(body.get('notes', '')),
        ingredients=ingredients,
        is_public=parse_bool(body.get('is_public', False)),
    )
    return jsonify(_recipe_response(recipe)), 201


@api.route('/recipes/<int:id>')
def recipe_view(id):
    recipe = get_recipe(id)
    if recipe is None:
        abort(404, description=f'Recipe {id} not found')
    return jsonify(_recipe_response(recipe))


@api.route('/recipes/<int:id>/share')
def recipe_share(id):
    recipe = get_recipe(id)
    if recipe is None:
        abort(404, description=f'Recipe {id} not found')
    draft = recipe_to_draft(recipe)
    return jsonify({'fragment': build_share_fragment(draft.ingredients, draft.notes)})


@api.route('/recipes/<int:id>', methods=['PUT'])
def recipe_edit(id):
    body = _json_body()
    recipe = update_recipe(
        id,
        title=sanitize_recipe_title(body['title']) if 'title' in body else None,
        description=sanitize_description(body['description']) if 'description' in body else None,
        notes=sanitize_notes(body['notes']) if 'notes' in body else None,
        ingredients=_read_ingredients(body, required=False),
        is_public=parse_bool(body['is_public']) if 'is_public' in body else None,
    )
    if recipe is None:
        abort(404, description=f'Recipe {id} not found')
    return jsonify(_recipe_response(recipe))


@api.route('/recipes/<int:id>', methods=['DELETE'])
def recipe_delete(id):
    if not delete_recipe(id):
        abort(404, description=f'Recipe {id} not found')
    return jsonify({'deleted': True})


# ============================================
# ERROR HANDLERS
# ============================================

def handle_http_error(error):
    return jsonify({'error': error.description}), error.code


def handle_store_error(error):
    current_app.logger.error("Recipe store failure: %s", error)
    return jsonify({'error': str(error)}), 500


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    level = app.config.get('LOG_LEVEL', 'INFO')
    app.logger.setLevel(level)
    logging.getLogger('services').setLevel(level)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(api)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(RecipeStoreError, handle_store_error)

    return app


def init_db(app):
    """Create any missing tables."""
    with app.app_context():
        db.create_all()


app = create_app()


if __name__ == '__main__':
    logging.basicConfig(level=app.config['LOG_LEVEL'],
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
