import json

import click

from hunt_api import db
from hunt_api.errors import HuntError


def register_commands(flask_app):
    from hunt_api.services.hunt.catalog import import_questions, sample_questions

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the question catalog."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            questions = sample_questions()
            db.session.add_all(questions)
            db.session.commit()
            click.echo(f'Database has been reset and seeded with {len(questions)} questions!')

    @click.command('import-questions')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_questions_command(path):
        """Loads questions from a JSON array of {ID, Difficulty, Content, Answer}."""
        with open(path, encoding='utf-8') as fh:
            try:
                rows = json.load(fh)
            except json.JSONDecodeError as exc:
                raise click.ClickException(f'{path} is not valid JSON: {exc}')
        if not isinstance(rows, list):
            raise click.ClickException(f'{path} must contain a JSON array')
        with flask_app.app_context():
            try:
                created, updated = import_questions(rows)
            except HuntError as exc:
                raise click.ClickException(exc.message)
        click.echo(f'Imported questions: {created} created, {updated} updated')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(import_questions_command)
