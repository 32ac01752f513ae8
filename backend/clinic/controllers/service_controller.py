"""
Service catalog controller.
"""

from flask import Blueprint, request

from clinic.core.api_utils import api_response, get_json_body, get_services
from clinic.core.auth_decorators import jwt_required
from clinic.schemas.dtos import ServiceRequest, ServiceResponse

service_bp = Blueprint("services", __name__, url_prefix="/api/services")


@service_bp.route("", methods=["GET"])
@jwt_required
def list_services():
    """List services; ``?category=`` filters, ``?query=`` searches."""
    catalog = get_services().catalog
    category = request.args.get("category")
    if category is not None:
        services = catalog.get_services_by_category(category)
    else:
        services = catalog.search_services(request.args.get("query", ""))
    return api_response(
        True,
        "Services retrieved",
        [ServiceResponse.from_domain(s).to_dict() for s in services],
    )


@service_bp.route("", methods=["POST"])
@jwt_required
def create_service():
    service = ServiceRequest.from_json(get_json_body()).to_domain()
    created = get_services().catalog.create_service(service)
    return api_response(
        True, "Service created", ServiceResponse.from_domain(created).to_dict(), 201
    )


@service_bp.route("/<int:service_id>", methods=["GET"])
@jwt_required
def get_service(service_id: int):
    service = get_services().catalog.get_service(service_id)
    return api_response(
        True, "Service retrieved", ServiceResponse.from_domain(service).to_dict()
    )


@service_bp.route("/<int:service_id>", methods=["PUT"])
@jwt_required
def update_service(service_id: int):
    service = ServiceRequest.from_json(get_json_body()).to_domain(service_id)
    updated = get_services().catalog.update_service(service)
    return api_response(
        True, "Service updated", ServiceResponse.from_domain(updated).to_dict()
    )


@service_bp.route("/<int:service_id>", methods=["DELETE"])
@jwt_required
def delete_service(service_id: int):
    get_services().catalog.delete_service(service_id)
    return api_response(True, "Service deleted")
