from collections import OrderedDict

import pytest
from ape.utils import ZERO_ADDRESS

from pool_deployment.confirm import DeploymentAborted, _confirm_resolution


def _answers(monkeypatch, *answers):
    prompts = []
    replies = iter(answers)

    def fake_input(prompt):
        prompts.append(prompt)
        return next(replies)

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


def test_confirmed_deployment(monkeypatch, capsys):
    prompts = _answers(monkeypatch, "y")

    _confirm_resolution(OrderedDict(token="T", signers=["A", "B"]), "MultiSigPool")

    assert prompts == ["Deploy MultiSigPool Y/N? "]
    output = capsys.readouterr().out
    assert "\ttoken=T" in output
    assert "\tsigners=['A', 'B']" in output


def test_declined_deployment(monkeypatch):
    _answers(monkeypatch, "N")

    with pytest.raises(DeploymentAborted):
        _confirm_resolution(OrderedDict(token="T"), "MultiSigPool")


def test_zero_address_signer_needs_confirmation(monkeypatch):
    prompts = _answers(monkeypatch, "y", "n")

    with pytest.raises(DeploymentAborted):
        _confirm_resolution(OrderedDict(signers=["A", ZERO_ADDRESS]), "MultiSigPool")

    assert len(prompts) == 2
    assert prompts[1].startswith("Zero Address detected")
