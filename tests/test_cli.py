"""Tests for the ddl-reorder command line."""

import pytest

from ddl_reorder.cli import build_parser, main


class TestArguments:

    def test_defaults(self):
        args = build_parser().parse_args(["-i", "schema.sql"])
        assert args.input == "schema.sql"
        assert args.output is None
        assert args.keep_preamble is None
        assert args.root_order is None
        assert args.verbose == 0

    def test_verbose_and_quiet_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-i", "x.sql", "-v", "-q"])


class TestMain:

    def test_missing_input_flag(self, capsys):
        assert main([]) == 1
        err = capsys.readouterr().err
        assert "-i/--input" in err
        assert "usage:" in err

    def test_success(self, write_sql, shop_ddl, tmp_path, capsys):
        source = write_sql(shop_ddl)
        out = tmp_path / "out.sql"

        assert main(["-i", str(source), "-o", str(out)]) == 0

        assert "Wrote 4 tables" in capsys.readouterr().out
        text = out.read_text(encoding="utf-8")
        assert text.index("CREATE TABLE customers") < text.index("CREATE TABLE orders")

    def test_keep_preamble_flag(self, write_sql, shop_ddl, tmp_path):
        source = write_sql(shop_ddl)
        out = tmp_path / "out.sql"

        main(["-i", str(source), "-o", str(out), "--keep-preamble"])

        assert out.read_text(encoding="utf-8").startswith("-- shop schema\n")

    def test_unreadable_input(self, tmp_path, capsys):
        assert main(["-i", str(tmp_path / "missing.sql"), "-o", str(tmp_path / "o.sql")]) == 1
        assert "Could not read input file" in capsys.readouterr().err

    def test_unwritable_output(self, write_sql, shop_ddl, tmp_path, capsys):
        source = write_sql(shop_ddl)
        target = tmp_path / "missing_dir" / "out.sql"
        assert main(["-i", str(source), "-o", str(target)]) == 1
        assert "Could not write output file" in capsys.readouterr().err

    def test_cycle(self, write_sql, cyclic_ddl, tmp_path, capsys):
        source = write_sql(cyclic_ddl)
        out = tmp_path / "out.sql"

        assert main(["-i", str(source), "-o", str(out)]) == 1

        assert "Cyclic foreign key dependency" in capsys.readouterr().err
        assert not out.exists()

    def test_undeclared_parent(self, write_sql, tmp_path, capsys):
        source = write_sql(
            "CREATE TABLE orders (\n"
            "  FOREIGN KEY (customer_id) REFERENCES customers(id)\n"
            ");\n"
        )
        out = tmp_path / "out.sql"

        assert main(["-i", str(source), "-o", str(out)]) == 1
        assert "undeclared tables" in capsys.readouterr().err
        assert not out.exists()

        assert main(["-i", str(source), "-o", str(out), "--allow-external-references"]) == 0
        assert out.read_text(encoding="utf-8").startswith("CREATE TABLE orders")

    def test_self_reference(self, write_sql, tmp_path, capsys):
        source = write_sql(
            "CREATE TABLE employees (\n"
            "  id INT PRIMARY KEY,\n"
            "  FOREIGN KEY (manager_id) REFERENCES employees(id)\n"
            ");\n"
        )
        out = tmp_path / "out.sql"

        assert main(["-i", str(source), "-o", str(out)]) == 1
        assert "Cyclic foreign key dependency" in capsys.readouterr().err
        assert main(["-i", str(source), "-o", str(out), "--allow-self-references"]) == 0

    def test_unknown_encoding(self, write_sql, shop_ddl, tmp_path, capsys):
        source = write_sql(shop_ddl)
        out = tmp_path / "out.sql"

        assert main(["-i", str(source), "-o", str(out), "--encoding", "nope"]) == 1

        assert "Unknown encoding" in capsys.readouterr().err
        assert not out.exists()

    def test_non_bool_config_value(self, write_sql, shop_ddl, tmp_path, capsys):
        source = write_sql(shop_ddl)
        config = tmp_path / "reorder.yaml"
        config.write_text('keep_preamble: "no"\n', encoding="utf-8")

        assert main(["-i", str(source), "-c", str(config)]) == 1
        assert "keep_preamble must be true or false" in capsys.readouterr().err

    def test_config_file(self, write_sql, shop_ddl, tmp_path):
        source = write_sql(shop_ddl)
        out = tmp_path / "configured.sql"
        config = tmp_path / "reorder.yaml"
        config.write_text(f"output_path: {out}\nroot_order: name\n", encoding="utf-8")

        assert main(["-i", str(source), "-c", str(config)]) == 0

        text = out.read_text(encoding="utf-8")
        assert text.startswith("CREATE TABLE customers")

    def test_bad_config(self, write_sql, shop_ddl, tmp_path, capsys):
        source = write_sql(shop_ddl)
        config = tmp_path / "reorder.yaml"
        config.write_text("root_order: random\n", encoding="utf-8")

        assert main(["-i", str(source), "-c", str(config)]) == 1
        assert "root_order" in capsys.readouterr().err
