import uuid
from datetime import time
import click
from flask.cli import with_appcontext
from nutrito.extensions import db
from nutrito.models.constants import ROLE_ADMIN
from nutrito.models.nutritionist_models import Nutritionist, AttentionHour
from nutrito.models.user_models import User

DEMO_NUTRITIONISTS = [
    {
        'first_name': 'Laura', 'last_name': 'Gómez', 'license_number': 'MN-1001',
        'specialties': ['clinical', 'diabetes'], 'modalities': ['in_person', 'remote'],
        'rating': 4.8, 'total_reviews': 32,
        'description': 'Clinical nutrition and metabolic disorders.',
        'hours': [(0, 9, 13), (2, 9, 13), (4, 14, 18)],
    },
    {
        'first_name': 'Martín', 'last_name': 'Pereyra', 'license_number': 'MN-1002',
        'specialties': ['sports'], 'modalities': ['remote', 'hybrid'],
        'rating': 4.5, 'total_reviews': 18,
        'description': 'Sports nutrition for amateur and professional athletes.',
        'hours': [(1, 8, 12), (3, 8, 12)],
    },
    {
        'first_name': 'Sofía', 'last_name': 'Ruiz', 'license_number': 'MN-1003',
        'specialties': ['pediatric', 'celiac', 'vegetarian'], 'modalities': ['in_person'],
        'rating': 4.9, 'total_reviews': 41,
        'description': 'Pediatric nutrition and plant-based diets.',
        'hours': [(0, 14, 19), (3, 14, 19), (5, 9, 12)],
    },
]

@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create every table of the schema."""
    db.create_all()
    click.echo("Database initialized successfully!")

@click.command('seed-demo')
@click.option('--admin-email', default='admin@nutrito.local', show_default=True)
@click.option('--admin-password', default='Admin12345', show_default=True)
@with_appcontext
def seed_demo_command(admin_email, admin_password):
    """Insert an admin account and sample nutritionists."""
    admin_email = User.normalize_email(admin_email)
    if not User.query.filter_by(email=admin_email).first():
        admin = User(id=str(uuid.uuid4()), email=admin_email, role=ROLE_ADMIN)
        admin.set_password(admin_password)
        db.session.add(admin)
        click.echo(f"Added admin: {admin_email}")
    else:
        click.echo(f"Admin already exists: {admin_email}")

    for data in DEMO_NUTRITIONISTS:
        if Nutritionist.query.filter_by(license_number=data['license_number']).first():
            click.echo(f"Nutritionist already exists: {data['license_number']}")
            continue

        nutritionist = Nutritionist(
            id=str(uuid.uuid4()),
            first_name=data['first_name'],
            last_name=data['last_name'],
            license_number=data['license_number'],
            rating=data['rating'],
            total_reviews=data['total_reviews'],
            description=data['description'],
        )
        nutritionist.specialties = data['specialties']
        nutritionist.modalities = data['modalities']
        nutritionist.attention_hours = [
            AttentionHour(weekday=weekday, start_time=time(start), end_time=time(end))
            for weekday, start, end in data['hours']
        ]
        db.session.add(nutritionist)
        click.echo(f"Added nutritionist: {data['first_name']} {data['last_name']}")

    db.session.commit()
    click.echo("Demo data seeded successfully!")

def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_demo_command)
