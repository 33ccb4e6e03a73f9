# kudoctl

Tooling for working with KUDO operators on Kubernetes. It builds the
manifests that set KUDO up in a cluster (custom resource definitions,
namespace, service account, role binding, webhook secret, controller
stateful set and service), sets up the local `$KUDO_HOME` directory,
and provides the argument checks used by the install, update, upgrade
and get commands.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The package installs a `kubectl-kudo` command with two subcommands,
`init` and `version`.

Print the version:

```
kubectl-kudo version
```

Print every manifest needed to run KUDO as a multi-document YAML stream
(each document starts with `---`, the stream ends with `...`), without
touching a cluster or the local home:

```
kubectl-kudo init --dry-run --output yaml
```

Only the custom resource definitions:

```
kubectl-kudo init --crd-only --dry-run --output yaml
```

Set up the local configuration directory only. This creates `$KUDO_HOME`,
its `repository` directory, and a `repository/repositories.yaml` file
holding one repository named `community` (left alone if it already
exists):

```
kubectl-kudo init --client-only
```

Other `init` options: `--kudo-image` / `-i` to replace the controller
image, `--version` to pick the controller version, `--namespace` / `-n`
for the namespace (default `kudo-system`), `--wait` / `-w` and
`--wait-timeout` (seconds, default 300). Combinations that make no sense
are rejected: `--kudo-image` with `--version`, `--client-only` with the
image, version, output, crd-only or wait options, `--crd-only` with
`--wait`, and `--wait-timeout` without `--wait`. `init` takes no
positional arguments.

The global options `--home`, `--kubeconfig` and `--namespace` are
accepted by every command. When `--home` or `--kubeconfig` are not
given, the `KUDO_HOME` and `KUBECONFIG` environment variables are used,
and after that the defaults `~/.kudo` and `$HOME/.kube/config`.

Errors are printed to standard error as `Error: ...` and the command
exits with status 1.

## Library use

Parse `key=value` parameters:

```python
from kudoctl.params import get_parameter_map

get_parameter_map(["replicas=3", "memory=1Gi"])
# {'replicas': '3', 'memory': '1Gi'}
```

Malformed entries (`foo`, `foo=`, `=bar`) raise `ParameterError`, with
every problem listed in one message.

Build the init manifests and write them out as YAML documents:

```python
import sys

from kudoctl.crds import crd_manifests
from kudoctl.initcmd import yaml_writer
from kudoctl.manager import manager_manifests
from kudoctl.options import InitOptions
from kudoctl.prereqs import prereq_manifests

opts = InitOptions.create("0.8.0", "")
yaml_writer(sys.stdout, crd_manifests() + prereq_manifests(opts) + manager_manifests(opts))
```

An empty namespace selects `kudo-system`; the controller image defaults to
`kudobuilder/controller:v<version>`.

Check that an upgrade really moves forward:

```python
from kudoctl.upgrade import check_upgrade_versions

check_upgrade_versions("1.0", "1.1.1")   # passes
check_upgrade_versions("1.0", "0.1")     # raises CommandError: same or smaller version
```

Other helpers:

- `kudoctl.install`: `validate_install_args`, `version_exists`, and
  `missing_required_parameters` for finding required parameters without
  a default that were not supplied.
- `kudoctl.update.validate_update`, `kudoctl.upgrade.validate_upgrade`
  and `kudoctl.get.validate_get_args` check those commands' arguments.
- `kudoctl.settings.parse_settings(argv, environ)` resolves the global
  settings into a `Settings` object.
- `kudoctl.files`: `full_path_to_target`, `copy_operator_tree` and
  `sha256_sum`.
- `kudoctl.manager.install(client, opts, crd_only)` creates the CRDs,
  prerequisites and manager through any object with a
  `create(manifest)` method, skipping objects for which it raises
  `AlreadyExistsError`. `watch_kudo_until_ready(list_pods, opts, timeout)`
  polls a pod-listing function until a ready manager pod runs the
  expected image.

## What this package does not do

It has no Kubernetes client of its own. `kubectl-kudo init` without
`--dry-run` or `--client-only` fails with "could not get Kubernetes
client"; installing into a cluster works only from Python, by handing
`InitCommand` or `install` an object that creates the manifests, and
`--wait` likewise needs a pod-listing function supplied from Python.
There are no `install`, `update`, `upgrade`, `uninstall`, `get`, `plan`,
`repo`, `package` or `test` commands: only the argument checks for some
of them are provided, and there is no repository client, package
loader or index builder.