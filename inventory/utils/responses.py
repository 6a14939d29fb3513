from flask import jsonify


def json_ok(data=None, code=200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), code


def json_error(message, code=400):
    return jsonify({"success": False, "message": message}), code
