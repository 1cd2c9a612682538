"""
REST endpoints for managing the word-pair catalog.
"""

from flask import Blueprint, jsonify, request

from ..words.catalog import WordCatalog


def create_words_blueprint(catalog: WordCatalog) -> Blueprint:
    bp = Blueprint("words", __name__)

    @bp.get("/categories")
    def list_categories():
        return jsonify({
            "categories": catalog.get_categories(),
            "total_pairs": catalog.total_pairs(),
        })

    @bp.put("/categories/<name>")
    def rename_category(name: str):
        new_name = ((request.get_json(silent=True) or {}).get("new_name") or "").strip()
        if not new_name:
            return jsonify({"error": "new_name is required"}), 400
        renamed = catalog.rename_category(name, new_name)
        return jsonify({"success": True, "renamed": renamed})

    @bp.delete("/categories/<name>")
    def delete_category(name: str):
        deleted = catalog.delete_category(name)
        return jsonify({"success": True, "deleted": deleted})

    @bp.get("/words")
    def list_words():
        category = request.args.get("category")
        pairs = catalog.get_pairs_by_category(category) if category else catalog.get_all_pairs()
        return jsonify({"pairs": [pair.to_dict() for pair in pairs], "total": len(pairs)})

    @bp.post("/words")
    def add_word():
        body = request.get_json(silent=True) or {}
        civilian = (body.get("civilian") or "").strip()
        undercover = (body.get("undercover") or "").strip()
        category = (body.get("category") or "").strip()
        if not (civilian and undercover and category):
            return jsonify({"error": "Missing required fields: civilian, undercover, category"}), 400
        pair = catalog.add_pair(civilian, undercover, category)
        return jsonify({"success": True, "pair": pair.to_dict()})

    @bp.put("/words/<int:pair_id>")
    def update_word(pair_id: int):
        body = request.get_json(silent=True) or {}
        pair = catalog.update_pair(
            pair_id,
            civilian=body.get("civilian"),
            undercover=body.get("undercover"),
            category=body.get("category"),
        )
        if pair is None:
            return jsonify({"error": "Word pair not found"}), 404
        return jsonify({"success": True, "pair": pair.to_dict()})

    @bp.delete("/words/<int:pair_id>")
    def delete_word(pair_id: int):
        if not catalog.delete_pair(pair_id):
            return jsonify({"error": "Word pair not found"}), 404
        return jsonify({"success": True})

    @bp.post("/words/bulk")
    def add_words_bulk():
        pairs = (request.get_json(silent=True) or {}).get("pairs")
        if not isinstance(pairs, list):
            return jsonify({"error": "pairs must be a list"}), 400
        added = catalog.add_bulk(entry for entry in pairs if isinstance(entry, dict))
        return jsonify({"success": True, "added": len(added), "pairs": [pair.to_dict() for pair in added]})

    @bp.post("/words/reset")
    def reset_words():
        count = catalog.reset_to_defaults()
        return jsonify({"success": True, "count": count})

    return bp
