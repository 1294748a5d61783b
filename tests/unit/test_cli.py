import pytest

from jewepe_portal.app.main import build_parser, main


def test_list_arguments_are_parsed() -> None:
    args = build_parser().parse_args(["orders", "list", "--status", "approved", "--limit", "20", "--sort", "newest"])

    assert args.entity == "orders"
    assert args.status == "approved"
    assert args.limit == 20
    assert args.page == 1


def test_page_size_outside_options_is_refused() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["packages", "list", "--limit", "7"])


def test_packages_have_no_status_filter() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["packages", "list", "--status", "NEW"])


def test_check_order_needs_code_or_email() -> None:
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["check-order"])
    with pytest.raises(SystemExit):
        parser.parse_args(["check-order", "--code", "WO-123456", "--email", "a@b.id"])


def test_invalid_config_exits_with_2(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.setenv("JEWEPE_PAGE_SIZE", "7")

    code = main(["--env-file", str(tmp_path / "missing.env"), "overview"])

    assert code == 2
    assert "JEWEPE_PAGE_SIZE" in capsys.readouterr().err
