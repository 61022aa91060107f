"""Example usage of the policy loader: bootstrap a small datacenter from aliases."""

from cloud_policies import DatacenterConfig, HostConfig, PolicyLoader, VmConfig
from cloud_policies.core import Host, ResourceSpecs, VirtualMachine
from cloud_policies.schedulers import Cloudlet


def main():
    """Build hosts and VMs from scenario records and run a few cloudlets."""

    print("=" * 70)
    print("Cloud Policies - Example Usage")
    print("=" * 70)
    print()

    datacenter_config = DatacenterConfig(
        name="dc-1",
        allocation_policy_alias="BestFit",
        hosts=[
            HostConfig(
                specs=ResourceSpecs(pes=8, mips_per_pe=1000.0, ram_mb=16384, bw_mbps=10000),
                vm_scheduler_alias="TimeShared",
                amount=2,
            ),
            HostConfig(
                specs=ResourceSpecs(pes=4, mips_per_pe=2000.0, ram_mb=8192, bw_mbps=10000),
                vm_scheduler_alias="SpaceShared",
            ),
        ],
    )
    vm_configs = [
        VmConfig(specs=ResourceSpecs(pes=2, mips_per_pe=1000.0, ram_mb=2048, bw_mbps=1000), amount=3),
        VmConfig(
            specs=ResourceSpecs(pes=1, mips_per_pe=1000.0, ram_mb=1024, bw_mbps=500),
            scheduling_policy_alias="SpaceShared",
        ),
    ]

    loader = PolicyLoader()

    # Hosts: one VM scheduler and two provisioners per host, all from aliases
    hosts = {}
    for host_config in datacenter_config.hosts:
        for _ in range(host_config.amount):
            host_id = f"host-{len(hosts) + 1:03d}"
            hosts[host_id] = Host(
                host_id=host_id,
                specs=host_config.specs,
                vm_scheduler=loader.new_vm_scheduler(host_config),
                bw_provisioner=loader.new_resource_provisioner(host_config),
                pe_provisioner=loader.new_pe_provisioner(host_config),
            )
    print(f"Created {len(hosts)} hosts")

    allocation_policy = loader.vm_allocation_policy(datacenter_config)
    print(f"Allocation policy: {type(allocation_policy).__name__}")
    print()

    vms = []
    for vm_config in vm_configs:
        for _ in range(vm_config.amount):
            vm = VirtualMachine(
                vm_id=f"vm-{len(vms) + 1:03d}",
                specs=vm_config.specs,
                cloudlet_scheduler=loader.cloudlet_scheduler(vm_config),
            )
            host = allocation_policy.allocate_host_for_vm(vm, hosts)
            print(f"{vm.vm_id} ({type(vm.cloudlet_scheduler).__name__}) -> "
                  f"{host.host_id if host else 'not placed'}")
            vms.append(vm)
    print()

    utilization = loader.utilization_model("Full")
    for i, vm in enumerate(vms):
        vm.cloudlet_scheduler.submit(Cloudlet(f"cloudlet-{i}", length_mi=10000, utilization_model=utilization))

    for time in range(1, 11):
        for vm in vms:
            for cloudlet in vm.cloudlet_scheduler.update_processing(float(time)):
                print(f"t={time:>2}s  {cloudlet.cloudlet_id} finished on {vm.vm_id}")

    print()
    print("=" * 70)
    print("Example completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    main()
