# Purpose: Smoke-tests for the Flask app factory and blueprint registration.

from flask import Flask

from app import create_app


def test_create_app_blueprints(tmp_path):
    app = create_app(instance_path=str(tmp_path / "instance"))
    assert isinstance(app, Flask)
    assert {"bond_bp", "health_bp"} <= set(app.blueprints.keys())


def test_create_app_routes(tmp_path):
    app = create_app(instance_path=str(tmp_path / "instance"))
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert {"/api/bond/calculate", "/api/bond/export", "/health", "/health/live", "/health/ready"} <= rules


def test_create_app_writes_log_file(tmp_path):
    instance_path = tmp_path / "instance"
    create_app(instance_path=str(instance_path))
    assert (instance_path / "app.log").exists()


def test_test_config_applied(tmp_path):
    app = create_app(test_config={"TESTING": True}, instance_path=str(tmp_path / "instance"))
    assert app.config["TESTING"] is True
    assert app.config["SERVICE_NAME"] == "bond-yield-calculator"
