import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from backend.context import BookingContext
from backend.core import config
from backend.routes import appointment_routes, doctor_routes
from backend.storage import create_store_tables

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI(title='Doctor Appointment Booking API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
async def initialize_booking_context() -> None:
    config.validate_runtime_config()

    try:
        create_store_tables()
    except SQLAlchemyError:
        logger.exception('Store initialization failed. Check DATABASE_URL; appointments will not be saved.')

    context = BookingContext.create()
    app.state.booking_context = context
    logger.info('Loaded %d stored appointments', context.ledger.count)

    if config.FETCH_DOCTORS_ON_STARTUP:
        await context.catalog.refresh()


@app.get('/')
def root():
    return {'status': 'Doctor Appointment Booking API Running'}


app.include_router(doctor_routes.router, prefix='/doctors')
app.include_router(appointment_routes.router, prefix='/appointments')
