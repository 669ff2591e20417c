from flask import Blueprint

bp = Blueprint("ats", __name__)

from . import routes  # noqa: E402,F401
