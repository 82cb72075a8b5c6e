"""
API JSON per le risorse possedute (note, todo, contatti, note personalizzate).

Ogni blueprint espone la stessa forma:

GET    /api/<risorsa>         -> 200, elenco dei record dell'utente
POST   /api/<risorsa>         -> 201, record creato
PUT    /api/<risorsa>/<id>    -> 200, record aggiornato (404 se non suo)
DELETE /api/<risorsa>/<id>    -> 200, {"message": ...} (404 se non suo)

Tutte le route richiedono il token (gate applicato al blueprint).
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from notelog.middleware.auth import current_principal, protect_blueprint
from notelog.services.resource_service import OwnedResourceService


def build_resource_blueprint(name: str, service: OwnedResourceService) -> Blueprint:
    """Crea il blueprint CRUD per una risorsa configurata su OwnedResourceService."""
    bp = protect_blueprint(Blueprint(name, __name__))

    @bp.route("", methods=["GET"])
    def list_records():
        records = service.list(current_principal())
        return jsonify([r.to_dict() for r in records])

    @bp.route("", methods=["POST"])
    def create_record():
        data = request.get_json(silent=True)
        record = service.create(current_principal(), data)
        return jsonify(record.to_dict()), 201

    @bp.route("/<int:record_id>", methods=["PUT"])
    def update_record(record_id: int):
        data = request.get_json(silent=True)
        record = service.update(current_principal(), record_id, data)
        return jsonify(record.to_dict())

    @bp.route("/<int:record_id>", methods=["DELETE"])
    def delete_record(record_id: int):
        service.delete(current_principal(), record_id)
        return jsonify({"message": f"{service.label} deleted successfully"})

    return bp
