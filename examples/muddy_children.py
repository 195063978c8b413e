"""Muddy Children -- knowledge, group knowledge and common knowledge.

Two children, a and b, play outside. Each can see the other's forehead but
not their own. We build the Kripke model of what they consider possible and
check which facts are known, known by everyone, distributed and common.
"""

from epistemic_mpl import KripkeModel, Wff, check, truth
from epistemic_mpl.model import closure_matrix, union_reachable
from epistemic_mpl.serialization import model_to_string

# =============================================================
# Build the model
# =============================================================
print("=== Muddy Children Model ===")

model = KripkeModel()
clean = model.add_world()
a_muddy = model.add_world({"ma": True})
b_muddy = model.add_world({"mb": True})
both = model.add_world({"ma": True, "mb": True})

# Every world is possible for both children at itself
for w in model.live_worlds():
    model.add_transition(w, w, ["a", "b"])

# a cannot tell worlds apart that differ only in its own forehead
for x, y in [(clean, a_muddy), (b_muddy, both)]:
    model.add_transition(x, y, "a")
    model.add_transition(y, x, "a")

# likewise for b
for x, y in [(clean, b_muddy), (a_muddy, both)]:
    model.add_transition(x, y, "b")
    model.add_transition(y, x, "b")

print(model)
print(f"Wire format: {model_to_string(model)}")

# =============================================================
# Individual knowledge
# =============================================================
print("\n=== Individual Knowledge (both muddy) ===")

formulas = [
    "a ? mb",
    "a ? ma",
    "b ? ma",
    "a ? ~(b ? mb)",
]
for text in formulas:
    wff = Wff(text)
    print(f"  {wff.unicode:<24} {truth(model, both, wff)}")

# =============================================================
# Group knowledge
# =============================================================
print("\n=== Group Knowledge (both muddy) ===")

someone = "(ma | mb)"
for op, name in [("?E", "everyone knows"), ("?D", "distributed"), ("?C", "common")]:
    wff = Wff(f"a,b {op} {someone}")
    result = check(model, both, wff)
    print(f"  {name:<16} {wff.ascii:<22} {result.satisfied}")
    print(f"  {'':<16} holds at worlds {sorted(result.satisfying_worlds)}")

print("\n=== Only a muddy ===")
for agent in ["a", "b"]:
    reachable = union_reachable(model, a_muddy, [agent])
    print(f"  {agent} reaches from {a_muddy}: {sorted(reachable)}")
print(f"  a cannot rule out world {clean}, where nobody is muddy")
for op in ["?E", "?C"]:
    wff = Wff(f"a,b {op} {someone}")
    print(f"  {wff.unicode:<28} {truth(model, a_muddy, wff)}")

# The father announces that someone is muddy: drop the clean world
print("\n=== After the announcement ===")
model.remove_world(clean)
for op in ["?E", "?C"]:
    wff = Wff(f"a,b {op} {someone}")
    print(f"  {wff.unicode:<28} {truth(model, a_muddy, wff)}")
print(f"  closure matrix for a, b:\n{closure_matrix(model, ['a', 'b']).astype(int)}")
