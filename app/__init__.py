"""Social Data Hub Flask Application Package.

To use the Flask app:
    from app.flask_app import create_app

To translate attribute names and records without Flask:
    from app.core.field_mapper import FieldMapper
"""
# Note: We don't import flask_app by default so the core translation
# layer stays usable without Flask installed
