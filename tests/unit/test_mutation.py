"""
Tree Mutation Unit Tests
Tests for core/merkle/mutation.py
"""
import pytest

from core.merkle.merkle_proofs import get_proof, validate_proof
from core.merkle.merkle_tree import build_merkle_tree
from core.merkle.mutation import RebuildingTreeMutator, TreeMutator
from core.schemas.errors import IndexOutOfRangeError

from fixtures.common import make_elements, make_tree


@pytest.fixture
def mutator():
    return RebuildingTreeMutator()


class TestTreeMutatorInterface:
    """The mutator base class is abstract."""

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            TreeMutator()

    def test_rebuilding_is_a_mutator(self, mutator):
        assert isinstance(mutator, TreeMutator)


class TestAppendElement:
    """Tests for append_element()."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 7])
    def test_append_matches_fresh_build(self, mutator, count):
        tree = make_tree(count)
        appended = mutator.append_element(tree, "new")

        fresh = build_merkle_tree(make_elements(count) + ["new"])
        assert appended.root_digest == fresh.root_digest
        assert appended.size == count + 1

    def test_original_tree_unchanged(self, mutator, abc_tree):
        root = abc_tree.root_digest
        mutator.append_element(abc_tree, "d")

        assert abc_tree.size == 3
        assert abc_tree.root_digest == root

    def test_appended_element_is_provable(self, mutator, abc_tree):
        appended = mutator.append_element(abc_tree, "d")

        assert validate_proof(appended, 3, get_proof(appended, 3))

    def test_encoding_is_kept(self, mutator):
        tree = build_merkle_tree(["é"], encoding="latin-1")
        appended = mutator.append_element(tree, "ü")

        assert appended.encoding == "latin-1"
        assert appended.root_digest == build_merkle_tree(["é", "ü"], encoding="latin-1").root_digest


class TestUpdateElement:
    """Tests for update_element()."""

    def test_update_matches_fresh_build(self, mutator, six_tree):
        updated = mutator.update_element(six_tree, 4, "replaced")

        elements = make_elements(6)
        elements[4] = "replaced"
        assert updated.root_digest == build_merkle_tree(elements).root_digest
        assert updated.root_digest != six_tree.root_digest

    def test_update_with_same_element_keeps_root(self, mutator, abc_tree):
        updated = mutator.update_element(abc_tree, 1, "b")

        assert updated.root_digest == abc_tree.root_digest

    def test_old_proof_fails_after_update(self, mutator, abc_tree):
        old_proof = get_proof(abc_tree, 0)
        updated = mutator.update_element(abc_tree, 2, "z")

        assert not validate_proof(updated, 0, old_proof)
        assert validate_proof(updated, 0, get_proof(updated, 0))

    def test_update_out_of_range(self, mutator, abc_tree):
        with pytest.raises(IndexOutOfRangeError):
            mutator.update_element(abc_tree, 3, "x")
        with pytest.raises(IndexOutOfRangeError):
            mutator.update_element(abc_tree, -1, "x")
