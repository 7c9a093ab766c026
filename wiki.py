import logging
import os
import re
from functools import wraps

from flask import Flask, abort, redirect, render_template, request, url_for
from jinja2 import TemplateError

from pages import PAGES_DIR, Page, load_page

app = Flask(__name__)

app.config["PAGES_DIR"] = PAGES_DIR
app.config["FRONT_PAGE"] = os.environ.get("WIKI_FRONT_PAGE", "Welcome")

TEMPLATES = ("edit.html", "view.html")

# Titles are letters and digits only, never a path
VALID_TITLE = re.compile(r"[a-zA-Z0-9]+")


def preload_templates():
    """Parse every template once so a broken one stops the server at startup"""
    for name in TEMPLATES:
        app.jinja_env.get_template(name)


def render_page(template, page):
    try:
        return render_template(template, page=page)
    except TemplateError as err:
        app.logger.error("render_page %s: %s", template, err)
        abort(500, description=str(err))


def make_handler(fn):
    """Pass the title from the URL to fn, or answer 404 if it isn't a valid one"""
    @wraps(fn)
    def handler(title):
        if not VALID_TITLE.fullmatch(title):
            abort(404)
        return fn(title)
    return handler


@app.route('/view/', defaults={'title': ''})
@app.route('/view/<path:title>')
@make_handler
def view(title):
    try:
        page = load_page(title, app.config["PAGES_DIR"])
    except OSError as err:
        app.logger.info("view %s: %s; redirect to edit", title, err)
        return redirect(url_for('edit', title=title))
    return render_page("view.html", page)


@app.route('/edit/', defaults={'title': ''})
@app.route('/edit/<path:title>')
@make_handler
def edit(title):
    try:
        page = load_page(title, app.config["PAGES_DIR"])
    except OSError:
        page = Page(title=title)
    return render_page("edit.html", page)


@app.route('/save/', defaults={'title': ''}, methods=['GET', 'POST'])
@app.route('/save/<path:title>', methods=['GET', 'POST'])
@make_handler
def save(title):
    # <textarea name="body"> in edit.html; a posted body wins over the query string
    body = request.form.get('body', request.args.get('body', ''))
    page = Page(title=title, body=body.encode("utf-8"))
    try:
        page.save(app.config["PAGES_DIR"])
    except OSError as err:
        app.logger.error("save %s: %s", title, err)
        abort(500, description=str(err))
    return redirect(url_for('view', title=title))


@app.route('/')
@app.route('/view')
@app.route('/edit')
@app.route('/save', methods=['GET', 'POST'])
@app.route('/<path:path>')
def front_page(path=''):
    return redirect(url_for('view', title=app.config["FRONT_PAGE"]))


def setup_app():
    """Runs at import so `flask run` and WSGI servers get the same startup"""
    os.makedirs(app.config["PAGES_DIR"], exist_ok=True)
    preload_templates()


setup_app()


if __name__ == '__main__':
    app.logger.setLevel(logging.INFO)
    port = int(os.environ.get("PORT", 8080))
    app.logger.info("Listening on port: %s...", port)
    app.run(host=os.environ.get("HOST", '0.0.0.0'), port=port)
