"""Tests for the command-line interface."""

import pytest

from markovquote import cli


def write_corpus(tmp_path, text):
    path = tmp_path / 'quotes.txt'
    path.write_text(text, encoding='utf-8')
    return path


def test_generate_prints_quote(tmp_path, capsys):
    path = write_corpus(tmp_path, 'one two three.\n')
    assert cli.main(['--data', str(path), '--seed', '1', 'generate']) == 0
    assert capsys.readouterr().out == '\none two three.\n\n'


def test_generate_writes_output_file(tmp_path):
    path = write_corpus(tmp_path, 'one two three.\n')
    output = tmp_path / 'output.txt'
    argv = ['--data', str(path), 'generate', '--count', '3', '--output', str(output)]
    assert cli.main(argv) == 0
    assert output.read_text(encoding='utf-8').splitlines() == ['one two three.'] * 3


def test_generate_respects_max_length(tmp_path, capsys):
    path = write_corpus(tmp_path, 'a a a a a\n')
    assert cli.main(['--data', str(path), 'generate', '--max-length', '2']) == 0
    assert capsys.readouterr().out.strip() == 'a a a'


def test_same_seed_same_output(tmp_path, capsys, corpus_file):
    argv = ['--data', str(corpus_file), '--seed', '42', 'generate', '--count', '5']
    cli.main(argv)
    first = capsys.readouterr().out
    cli.main(argv)
    assert capsys.readouterr().out == first


def test_missing_corpus_fails(tmp_path, capsys):
    argv = ['--data', str(tmp_path / 'missing.txt'), 'generate']
    assert cli.main(argv) == 1
    assert capsys.readouterr().out == ''


def test_inspect_dumps_model(tmp_path, capsys):
    path = write_corpus(tmp_path, 'x y\n')
    assert cli.main(['--data', str(path), 'inspect', '--buckets', '5']) == 0
    out = capsys.readouterr().out
    assert 'Context: [None, None, x]' in out
    assert 'Value: [ {y: 1} ]' in out
    assert 'entries: 2' in out
    assert 'buckets: 5' in out


def test_invalid_config_exits(tmp_path):
    path = write_corpus(tmp_path, 'x y\n')
    with pytest.raises(SystemExit) as excinfo:
        cli.main(['--data', str(path), 'generate', '--context-size', '0'])
    assert excinfo.value.code == 2


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_seed_random_returns_given_seed():
    assert cli.seed_random(99) == 99


def test_undecodable_bytes_print_as_replacement(tmp_path, capsys):
    path = tmp_path / 'quotes.txt'
    path.write_bytes(b'caf\xe9.\n')
    assert cli.main(['--data', str(path), 'generate']) == 0
    assert capsys.readouterr().out == '\ncaf�.\n\n'


def test_undecodable_bytes_written_unchanged(tmp_path):
    path = tmp_path / 'quotes.txt'
    path.write_bytes(b'caf\xe9.\n')
    output = tmp_path / 'output.txt'
    assert cli.main(['--data', str(path), 'generate', '--output', str(output)]) == 0
    assert output.read_bytes() == b'caf\xe9.\n'
