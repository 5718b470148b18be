from forge.stores.plan_store import PLAN_LOCK_STRIPES, plan_lock


def test_same_plan_always_gets_the_same_lock():
    assert plan_lock(42) is plan_lock(42)


def test_lock_pool_does_not_grow_with_plans():
    locks = {id(plan_lock(plan_id)) for plan_id in range(10_000)}
    assert len(locks) <= PLAN_LOCK_STRIPES
