import os

from fastapi.templating import Jinja2Templates

# Page templates live in airfiber_billing/templates (emails/ holds the mail layouts)
current_dir = os.path.dirname(os.path.abspath(__file__))
templates_dir = os.path.normpath(os.path.join(current_dir, "..", "templates"))

templates = Jinja2Templates(directory=templates_dir)
