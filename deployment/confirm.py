def _abort() -> None:
    print("Aborting deployment!")
    exit(-1)


def _ask(question: str) -> None:
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        _abort()


def _continue() -> None:
    """Asks the user to continue."""
    _ask("Continue")


def _print_module_plan(plan, actions) -> None:
    """Shows where each module parameter came from and which contracts are reused or deployed."""
    print(f"\nModule {plan.module_id}")
    if plan.parameters:
        print("Parameters")
        for name, value in plan.parameters.items():
            source = "default" if name in plan.defaults else "params file"
            print(f"\t{name}={value!r} ({source})")
    else:
        print("(i) No parameters")

    print("Contracts")
    for action in actions:
        if action.registered_address:
            print(f"\t{action.contract_name}: reuse {action.registered_address}")
            continue
        args = ", ".join(f"{name}={value!r}" for name, value in action.named_args.items())
        print(f"\t{action.contract_name}({args}): deploy")


def _confirm_module_plan(plan, actions) -> None:
    """Asks the user to confirm a module run; nothing is asked when every contract is reused."""
    _print_module_plan(plan, actions)
    if all(action.registered_address for action in actions):
        return
    _ask(f"Run {plan.module_id}")
