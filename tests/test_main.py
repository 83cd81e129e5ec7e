import main
from conftest import read_workbook_rows, write_workbook


class TestMain:
    def test_success_prints_output_path(self, scenario_workbook, tmp_path, capsys):
        output = tmp_path / 'choices.xlsx'
        exit_code = main.main([str(scenario_workbook), str(output), '--no-progress'])

        assert exit_code == 0
        assert f"Cascading selection sheet written to {output}" in capsys.readouterr().out
        assert read_workbook_rows(output, 'choices')[1][:2] == ('Admin0', 'AA')

    def test_default_run_emits_no_diagnostics(self, scenario_workbook, tmp_path, capsys):
        main.main([str(scenario_workbook), str(tmp_path / 'choices.xlsx')])
        captured = capsys.readouterr()
        assert captured.err == ''
        assert captured.out.strip().startswith('Cascading selection sheet written to')

    def test_custom_sheet_name(self, scenario_workbook, tmp_path):
        output = tmp_path / 'choices.xlsx'
        assert main.main([str(scenario_workbook), str(output), '--sheet-name', 'admin']) == 0
        assert read_workbook_rows(output, 'admin')[0][0] == 'list_name'

    def test_missing_input(self, tmp_path, capsys):
        exit_code = main.main([str(tmp_path / 'missing.xlsx'), str(tmp_path / 'out.xlsx')])
        assert exit_code == 4
        assert 'Input file not found' in capsys.readouterr().err

    def test_existing_output_is_left_unchanged(self, scenario_workbook, tmp_path, capsys):
        output = tmp_path / 'choices.xlsx'
        output.write_bytes(b'keep me')

        exit_code = main.main([str(scenario_workbook), str(output)])

        assert exit_code == 2
        assert output.read_bytes() == b'keep me'
        assert 'already exists' in capsys.readouterr().err

    def test_overwrite_flag(self, scenario_workbook, tmp_path):
        output = tmp_path / 'choices.xlsx'
        output.write_bytes(b'old')
        assert main.main([str(scenario_workbook), str(output), '--overwrite']) == 0
        assert output.read_bytes() != b'old'

    def test_empty_level_warns_but_succeeds(self, tmp_path, capsys):
        source = write_workbook(tmp_path / 'in.xlsx', {'adm1': [
            ['ADM0_EN', 'ADM1_EN', 'ADM1_PCODE'],
            ['Xland', 'North', 'XX01'],
        ]})
        exit_code = main.main([str(source), str(tmp_path / 'choices.xlsx')])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert 'admin level(s) 0 produced no records' in captured.err
        assert 'Cascading selection sheet written to' in captured.out

    def test_no_matching_sheet(self, tmp_path):
        source = write_workbook(tmp_path / 'in.xlsx', {'Level1Data': [['x']], 'Level2Data': [['y']]})
        assert main.main([str(source), str(tmp_path / 'choices.xlsx')]) == 3

    def test_verbose_prints_summary(self, scenario_workbook, tmp_path, capsys):
        exit_code = main.main([str(scenario_workbook), str(tmp_path / 'choices.xlsx'), '-v', '--no-progress'])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert 'CASCADE CONVERSION COMPLETED' in out
        assert 'Peak memory usage' in out
