from flask import request, current_app
from nutrito.services.nutritionist_service import NutritionistService
from nutrito.utils.responses import success_response, page_response, error_response
from nutrito.utils.validators import (
    require_uuid, validate_pagination, validate_search, validate_slot_query, validate_schedule_query
)

def _service():
    return NutritionistService(
        default_limit=current_app.config['DEFAULT_PAGE_LIMIT'],
        max_limit=current_app.config['MAX_PAGE_LIMIT'],
    )

def search_nutritionists():
    filters = validate_search(request.args)
    limit, offset = validate_pagination(request.args, current_app.config['DEFAULT_PAGE_LIMIT'])
    page = _service().search(limit=limit, offset=offset, **filters)
    return page_response(page, lambda nutritionist: nutritionist.summary())

def get_nutritionist(nutritionist_id):
    return success_response(_service().profile(require_uuid(nutritionist_id)))

def check_availability(nutritionist_id):
    nutritionist_id = require_uuid(nutritionist_id)
    slot = validate_slot_query(request.args)
    if slot is None:
        return error_response('MISSING_PARAMETERS', 'fecha and hora are required', 400)

    day, at = slot
    return success_response({
        'nutritionist_id': nutritionist_id,
        'date': day.isoformat(),
        'time': at.strftime('%H:%M'),
        'is_available': _service().is_available(nutritionist_id, day, at),
    })

def get_schedule(nutritionist_id):
    day = validate_schedule_query(request.args)
    schedule = _service().schedule(
        require_uuid(nutritionist_id), day, current_app.config['APPOINTMENT_SLOT_MINUTES']
    )
    return success_response(schedule)
